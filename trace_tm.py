#!/usr/bin/env pypy3
# SPDX-FileCopyrightText: 2025 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
''' Space-time diagrams: one row per step, as text, PNG (pillow) or SVG (drawsvg). '''
from bb_sim import Trace
from bb_tm import ithl

STATE_COLOR = ((255, 0, 0), (255, 128, 0), (0, 0, 255), (0, 255, 0), (255, 0, 255), (0, 255, 255), (255, 255, 0))

def rows(trace, l, r):
    ''' Yield (state, head index, cells) per step, with cells covering positions l..r. '''
    for config in trace:
        yield config.state, config.pos - l, [config.tape[x - config.pos] for x in range(l, r+1)]

def main(tm, step_limit, tape_l=0, tape_r=0, png=False, svg=False):
    ''' Write bb_<name>.txt, and optionally .png/.svg, in the current directory. Return the file names written. '''
    name = tm.name
    trace = Trace(tm, step_limit)
    fns = [f'bb_{name}.txt']
    with open(fns[0], 'w') as bbout:
        l, r = tape_l, tape_r
        for config in trace:
            l, r = min(l, config.pos), max(r, config.pos)
            cells = [config.tape[x - config.pos] for x in range(l, r+1)]
            i = config.pos - l
            print(*cells[:i], ithl(config.state), *cells[i:], sep='', file=bbout)
    if png:
        fns.append(save_png(tm, trace, name, l, r))
    if svg:
        fns.append(save_svg(tm, trace, name, l, r))
    return fns

def _gray(tm, s):
    return (round(255 * s / (tm.symbols-1)),) * 3

def save_png(tm, trace, name, l, r):
    from PIL import Image
    history = list(rows(trace, l, r))
    img = Image.new('RGB', (r-l+1, len(history)), color='black')
    pix = img.load()
    for row, (state, head, cells) in enumerate(history):
        for i, s in enumerate(cells):
            pix[i, row] = _gray(tm, s)
        pix[head, row] = STATE_COLOR[state % len(STATE_COLOR)]
    fn = f'bb_{name}.png'
    img.save(fn)
    return fn

def save_svg(tm, trace, name, l, r):
    from drawsvg import Drawing, Group, Rectangle
    SVG_CELL_SIZE = 32

    history = list(rows(trace, l, r))
    img = Drawing(SVG_CELL_SIZE*(r-l+1), SVG_CELL_SIZE*len(history))
    main_group = Group()
    main_group.append(Rectangle(0, 0, img.width, img.height, fill='black'))
    for row, (state, head, cells) in enumerate(history):
        row_group = Group()
        for i, s in enumerate(cells):
            color = STATE_COLOR[state % len(STATE_COLOR)] if i == head else _gray(tm, s)
            fill = 'rgb({},{},{})'.format(*color)
            row_group.append(Rectangle(SVG_CELL_SIZE*i, SVG_CELL_SIZE*row, SVG_CELL_SIZE, SVG_CELL_SIZE, fill=fill))
        main_group.append(row_group)
    img.append(main_group)
    fn = f'bb_{name}.svg'
    img.save_svg(fn)
    return fn

if __name__ == '__main__':
    from bb_args import ArgumentParser, tm_args
    ap = ArgumentParser(description='Diagram a TM (text/png/svg).', parents=[tm_args()])
    ap.add_argument('-N', '--step-limit', help='Number of steps to show.', type=int, default=10000)
    ap.add_argument('-l', '--tape-left', help='Tape includes this x position', type=int, default=0)
    ap.add_argument('-r', '--tape-right', help='Tape includes this x position', type=int, default=0)
    ap.add_argument('-p', '--png', help='Emit a PNG file', action='store_true')
    ap.add_argument('-v', '--svg', help='Emit an SVG file', action='store_true')
    args = ap.parse_args()
    for tm in args.machines:
        main(tm, step_limit=args.step_limit, tape_l=args.tape_left, tape_r=args.tape_right, png=args.png, svg=args.svg)
