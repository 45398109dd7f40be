#!/usr/bin/pypy3
# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
HALT, R, L = range(-1, 2)

def ithl(i):
    return chr(ord('A')+i)

class TM:
    ''' An immutable transition table. Each (state, symbol) cell takes 3 bytes of code: write, direction (0=R, 1=L), 1-based to-state (0=HALT). '''
    __slots__ = ('code', 'states', 'symbols', 'seed')

    def __init__(self, code, states=5, symbols=2, seed=None):
        code = bytes(code)
        if len(code) != 3*states*symbols:
            raise ValueError(f'Expected {3*states*symbols} bytes of code for a {states}x{symbols} TM, got {len(code)}')
        for i in range(0, len(code), 3):
            w, d, t = code[i:i+3]
            if t and (w >= symbols or d > 1 or t > states):
                raise ValueError(f'Invalid transition {tuple(code[i:i+3])} for a {states}x{symbols} TM')
        object.__setattr__(self, 'code', code)
        object.__setattr__(self, 'states', states)
        object.__setattr__(self, 'symbols', symbols)
        object.__setattr__(self, 'seed', seed)

    def __setattr__(self, name, value):
        raise AttributeError(f'{type(self).__name__} is immutable')

    def transition(self, from_state, read_symbol):
        """ Return (write, direction, to_state). (directions are R or L; to_state is HALT or a 0-based ID.) """
        assert 0 <= from_state < self.states and 0 <= read_symbol < self.symbols, f'No transition for {(from_state, read_symbol)}'
        fr = from_state * self.symbols + read_symbol
        w, d, t = self.code[3*fr:3*(fr+1)]
        return w, d, t-1

    def transitions(self):
        """ Yield tuples (from_state, read, write, direction, to_state). (directions are R or L; to_state is HALT or a 0-based ID.) """
        fr_x_3 = 0
        for f in range(self.states):
            for r in range(self.symbols):
                w, d, t = self.code[fr_x_3:fr_x_3+3]
                yield f, r, w, d, t-1
                fr_x_3 += 3

    def halting_pairs(self):
        return [(f, r) for f, r, w, d, t in self.transitions() if t == HALT]

    @property
    def name(self):
        return f'{self.states}x{self.symbols}_{self.seed}' if self.seed is not None else str(self)

    def table(self):
        ''' Render the transition table, one row per state. '''
        from tabulate import tabulate
        rows = [[ithl(f)] for f in range(self.states)]
        for f, r, w, d, t in self.transitions():
            rows[f].append('---' if t == HALT else f'{w}{"RL"[d]}{ithl(t)}')
        return tabulate(rows, headers=['s', *map(str, range(self.symbols))])

    def __str__(self):
        parts = []
        for f, r, w, d, t in self.transitions():
            if f > 0 and r == 0:
                parts.append('_')
            parts.append('---' if t < 0 else f'{w}{"RL"[d]}{ithl(t)}')
        return ''.join(parts)

    def __repr__(self):
        return f'{type(self).__name__}.from_text({str(self)!r})'

    def __eq__(self, other):
        if not isinstance(other, TM):
            return NotImplemented
        return (self.code, self.states, self.symbols) == (other.code, other.states, other.symbols)

    def __hash__(self):
        return hash((self.code, self.states, self.symbols))

    def __reversed__(self):
        mirror_tm = bytearray(self.code)
        for i in range(0, len(mirror_tm), 3):
            if mirror_tm[i+2]:
                mirror_tm[i+1] ^= 1
        return type(self)(mirror_tm, self.states, self.symbols, self.seed)

    @classmethod
    def from_text(cls, text, seed=None):
        tt_rows = text.strip().split('_')
        N, S = len(tt_rows), len(tt_rows[0])//3
        if S < 2 or not all(len(row) == 3*S for row in tt_rows):
            raise ValueError(f'Not in standard TM text format: {text!r}')
        code = bytearray(3*N*S)
        for f, row in enumerate(tt_rows):
            for r, (w, d, t) in enumerate(zip(row[::3], row[1::3], row[2::3])):
                if t == '-':
                    continue
                if not (w.isdigit() and d in 'RL' and 'A' <= t <= ithl(N-1)):
                    raise ValueError(f'Bad transition {w}{d}{t} in {text!r}')
                code[3*(f*S+r):3*(f*S+r+1)] = (int(w), 'RL'.index(d), ord(t)-64)
        return cls(bytes(code), N, S, seed)

if __name__ == '__main__':
    from bb_args import ArgumentParser, tm_args
    ap = ArgumentParser(description='Show transition tables.', parents=[tm_args()])
    args = ap.parse_args()
    for tm in args.machines:
        print(tm)
        print(tm.table())
        print()
