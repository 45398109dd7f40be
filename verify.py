#!/usr/bin/pypy3
# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
''' Certificate checks. These don't search: they replay a bounded prefix of the run, check a closure property, or check
    one symbolic pass. They share the simulator with the deciders, but none of the deciders' own logic. '''
from bb_cert import BackwardCert, BouncerCert, CyclerCert, InductiveCert, Pattern, Rep, TCyclerCert
from bb_decision import NonHalting
from bb_sim import Config, Tape, Trace
from bb_tm import HALT, L, R
from functools import singledispatch
import logging

log = logging.getLogger(__name__)

@singledispatch
def verify(cert):
    ''' Return True if the certificate proves its machine runs forever from the blank tape. '''
    raise TypeError(f'No verifier for {type(cert).__name__}')

@verify.register
def _(decision: NonHalting):
    return verify(decision.certificate)

def configs_at(tm, wanted):
    ''' Copies of the configurations at the wanted steps, or None if the machine halts first. '''
    out = {}
    for config in Trace(tm, max(wanted)):
        if config.steps in wanted:
            out[config.steps] = config.copy()
    return out if len(out) == len(set(wanted)) else None

def at_record(config, side):
    ''' True if the head is on a blank cell with nothing but blanks beyond it on "side". '''
    tape = config.tape
    return tape.head == 0 and not (tape.right if side == R else tape.left)

@verify.register
def _(cert: CyclerCert):
    if not 0 <= cert.i < cert.j:
        return False
    at = configs_at(cert.machine, (cert.i, cert.j))
    return at is not None and at[cert.i].key() == at[cert.j].key()

@verify.register
def _(cert: TCyclerCert):
    i, j, d, radius = cert.i, cert.j, cert.d, cert.window_radius
    if not 0 <= i < j or d == 0 or radius < 0:
        return False
    side = R if d > 0 else L
    at, lo, hi = {}, None, None
    trace = Trace(cert.machine, j)
    for config in trace:
        if config.steps >= i:
            lo = config.pos if lo is None else min(lo, config.pos)
            hi = config.pos if hi is None else max(hi, config.pos)
        if config.steps in (i, j):
            at[config.steps] = config.copy()
    if len(at) != 2:
        return False
    a, b = at[i], at[j]
    if a.state != b.state or b.pos - a.pos != d or not (at_record(a, side) and at_record(b, side)):
        return False
    if (lo < a.pos - radius) if side == R else (hi > a.pos + radius):
        return False
    return a.tape.window(side, radius) == b.tape.window(side, radius)

@verify.register
def _(cert: BackwardCert):
    tm = cert.machine
    reachers = set(cert.halt_reachers)
    if not reachers.issuperset(tm.halting_pairs()):
        return False
    if cert.depth == 0:
        for f, r, w, d, t in tm.transitions():
            if t != HALT and (f, r) not in reachers and any((t, s) in reachers for s in range(tm.symbols)):
                return False
        return (0, 0) not in reachers
    return _nothing_reaches_halt(tm, cert.depth)

def _nothing_reaches_halt(tm, depth):
    ''' Check that no partial configuration is exactly "depth" steps before a halting transition. '''
    # A level is a set of (state, cells) with cells a sorted tuple of (offset from head, symbol).
    level = {(f, ((0, r),)) for f, r in tm.halting_pairs()}
    for k in range(depth):
        if any(state == 0 and all(s == 0 for _, s in cells) for state, cells in level):
            return False
        previous = set()
        for state, cells in level:
            known = dict(cells)
            for f, r, w, d, t in tm.transitions():
                if t != state:
                    continue
                # Before the step, the head was one cell against direction d.
                back = -1 if d == R else 1
                if known.get(back, w) != w:
                    continue
                before = {offset - back: s for offset, s in known.items()}
                before[0] = r
                previous.add((f, tuple(sorted(before.items()))))
        level = previous
    return not level

def covers(c, q):
    ''' True if every configuration in class q is in class c. '''
    return (c.state, c.head) == (q.state, q.head) and _side_covers(c.left, c.left_open, q.left, q.left_open) \
        and _side_covers(c.right, c.right_open, q.right, q.right_open)

def _side_covers(c_cells, c_open, q_cells, q_open):
    for k, s in enumerate(c_cells):
        if k < len(q_cells):
            if q_cells[k] != s:
                return False
        elif q_open or s != 0:
            return False
    if c_open:
        return True
    return not q_open and not any(q_cells[len(c_cells):])

@verify.register
def _(cert: InductiveCert):
    tm, classes = cert.machine, cert.classes
    if not classes or len(cert.successors) != len(classes) or not covers(classes[0], Pattern(0, (), False, 0, (), False)):
        return False
    for p, links in zip(classes, cert.successors):
        w, d, t = tm.transition(p.state, p.head)
        if t == HALT or not all(0 <= k < len(classes) for k in links):
            return False
        # Step every configuration of p at once, keeping everything known (no truncation).
        if d == R:
            moved = [(head, (w,) + p.left, p.left_open, rest, is_open) for head, rest, is_open in _enter(p.right, p.right_open, tm.symbols)]
        else:
            moved = [(head, rest, is_open, (w,) + p.right, p.right_open) for head, rest, is_open in _enter(p.left, p.left_open, tm.symbols)]
        for head, left, left_open, right, right_open in moved:
            q = Pattern(t, left, left_open, head, right, right_open)
            if not any(covers(classes[k], q) for k in links):
                log.debug('%s: no class covers %s', cert.tm, q)
                return False
    return True

def _enter(cells, is_open, symbols):
    if cells:
        return [(cells[0], cells[1:], is_open)]
    return [(s, (), True) for s in range(symbols)] if is_open else [(0, (), False)]

@verify.register
def _(cert: BouncerCert):
    tm = cert.machine
    if cert.side not in (R, L) or not 0 <= cert.state < tm.states or cert.n0 < 0 or not cert.items or not cert.steps:
        return False
    at = configs_at(tm, (cert.steps[0],))
    if at is None:
        return False
    config = at[cert.steps[0]]
    tape = config.tape
    cells = tuple(tape.left) if cert.side == R else tuple(reversed(tape.right))
    if config.state != cert.state or not at_record(config, cert.side) or _strip(cells, cert.side) != _strip(_spell(cert.items, cert.n0), cert.side):
        return False
    return _symbolic_pass(tm, cert)

def _spell(items, n):
    return tuple(s for item in items for s in (item.word * n if isinstance(item, Rep) else (item,)))

def _strip(cells, side):
    ''' Drop the far blanks from cells given left-to-right. For side R the cells are left of the head, so strip the left end. '''
    cells = list(cells)
    end = 0 if side == R else -1
    while cells and cells[end] == 0:
        cells.pop(end)
    return tuple(cells)

def _canonical(items, side):
    ''' Rewrite (c u)^n c as c (u c)^n until no wall follows a repeater starting with that wall, then strip far blanks. '''
    items = list(items)
    changed = True
    while changed:
        changed = False
        for k in range(len(items)-1):
            a, b = items[k], items[k+1]
            if isinstance(a, Rep) and not isinstance(b, Rep) and a.word[0] == b:
                items[k], items[k+1] = b, Rep(a.word[1:] + (b,))
                changed = True
    return _strip(items, side)

def _cross(tm, state, facing, word):
    ''' Run one copy of word on its own, entered from the near end. Return the rewritten word if the head leaves by the
        far end in "state", else None. '''
    n = len(word)
    if facing == R:
        config = Config(state, 0, 0, Tape((), word[0], reversed(word[1:])))
    else:
        config = Config(state, n-1, 0, Tape(word[:-1], word[-1], ()))
    seen = set()
    while 0 <= config.pos < n:
        key = config.key()
        if key in seen or not config.step(tm):
            return None
        seen.add(key)
    if config.state != state or config.pos != (n if facing == R else -1):
        return None
    if facing == R:
        return (0,) * (n - len(config.tape.left)) + tuple(config.tape.left)
    return tuple(reversed(config.tape.right)) + (0,) * (n - len(config.tape.right))

def _symbolic_pass(tm, cert):
    ''' Run proof_steps symbolic steps from formula(n) and check we end at formula(n+1), in the same state and direction. '''
    side, state = cert.side, cert.state
    # stacks[f] is what the head reads next when facing f; the top of each stack is next to the head.
    stacks = {R: [], L: []}
    stacks[1-side] = list(cert.items) if side == R else list(reversed(cert.items))
    facing, moved = side, False
    for _ in range(cert.proof_steps):
        ahead, behind = stacks[facing], stacks[1-facing]
        item = ahead.pop() if ahead else 0
        if isinstance(item, Rep):
            word = _cross(tm, state, facing, item.word)
            if word is None:
                return False
            behind.append(Rep(word))
            continue
        w, d, t = tm.transition(state, item)
        if t == HALT:
            return False
        stacks[1-d].append(w)
        state, facing, moved = t, d, True
    if not moved or state != cert.state or facing != side:
        return False
    grown = tuple(x for item in cert.items for x in ((item, *item.word) if isinstance(item, Rep) else (item,)))
    left, right = stacks[L], stacks[R][::-1]
    if side == R:
        return _canonical(left, R) == _canonical(grown, R) and not _canonical(right, L)
    return _canonical(right, L) == _canonical(grown, L) and not _canonical(left, R)

if __name__ == '__main__':
    from argparse import ArgumentParser, FileType
    from bb_cert import from_json
    ap = ArgumentParser(description='Check non-halting certificates (one JSON object per line).')
    ap.add_argument('certificates', help='File of certificates', type=FileType('r'), nargs='?', default='-')
    args = ap.parse_args()
    for line in args.certificates:
        if line.strip():
            cert = from_json(line)
            print(cert.tm, cert.cert_type, 'OK' if verify(cert) else 'FAILED', sep=', ')
