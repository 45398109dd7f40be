# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from bb_tm import HALT, R, L, ithl

class Tape:
    ''' A bi-infinite tape as two stacks meeting at the head. left[-1] and right[-1] are the head's neighbors.
        A blank is never pushed onto an empty stack, so the far end of each stack is non-blank and
        equal Tapes are exactly the equal tape contents (up to translation). '''
    __slots__ = ('left', 'head', 'right')

    def __init__(self, left=(), head=0, right=()):
        self.left, self.head, self.right = list(left), head, list(right)

    def move(self, write, d):
        ''' Write a symbol under the head, then move it one cell in direction d. '''
        if d == R:
            if self.left or write:
                self.left.append(write)
            self.head = self.right.pop() if self.right else 0
        else:
            if self.right or write:
                self.right.append(write)
            self.head = self.left.pop() if self.left else 0

    def __getitem__(self, offset):
        ''' The symbol at a signed offset from the head. '''
        if offset == 0:
            return self.head
        stack = self.right if offset > 0 else self.left
        offset = abs(offset)
        return stack[-offset] if offset <= len(stack) else 0

    def window(self, side, radius):
        ''' The "radius" cells behind the head when it moves toward "side", nearest first, padded with blanks. '''
        stack = self.left if side == R else self.right
        cells = stack[:-radius-1:-1] if radius else []
        return tuple(cells) + (0,) * (radius - len(cells))

    def key(self):
        return tuple(self.left), self.head, tuple(self.right)

    def copy(self):
        return Tape(self.left, self.head, self.right)

    def __eq__(self, other):
        return isinstance(other, Tape) and self.key() == other.key()

    def __len__(self):
        return len(self.left) + 1 + len(self.right)

    def __str__(self):
        return ''.join(map(str, self.left)) + f'[{self.head}]' + ''.join(map(str, reversed(self.right)))

class Config:
    ''' A machine configuration: state, head position, number of steps taken, and tape. '''
    __slots__ = ('state', 'pos', 'steps', 'tape')

    def __init__(self, state=0, pos=0, steps=0, tape=None):
        self.state, self.pos, self.steps = state, pos, steps
        self.tape = Tape() if tape is None else tape

    def step(self, tm):
        ''' Apply one transition in place. Return False (leaving the configuration unchanged) if it halts. '''
        assert self.state != HALT, 'Stepping a halted machine'
        w, d, t = tm.transition(self.state, self.tape.head)
        if t == HALT:
            return False
        self.tape.move(w, d)
        self.pos += 1 - 2*d
        self.state = t
        self.steps += 1
        return True

    def halting(self, tm):
        return tm.transition(self.state, self.tape.head)[2] == HALT

    def key(self):
        ''' Identifies the configuration exactly. '''
        return (self.state, self.pos) + self.tape.key()

    def copy(self):
        return Config(self.state, self.pos, self.steps, self.tape.copy())

    def __eq__(self, other):
        return isinstance(other, Config) and self.key() == other.key()

    def __str__(self):
        return f'{self.steps}: {ithl(self.state)}@{self.pos} {self.tape}'

def step(tm, config):
    ''' Return the configuration one transition after "config", or None if the transition halts. '''
    out = config.copy()
    return out if out.step(tm) else None

class Trace:
    ''' The configurations of a run from the blank tape, re-run from step 0 on every iteration.
        Iteration yields one live Config, mutated in place: before the first step, then after each of at most step_limit steps.
        If the run reaches a halting instruction, iteration stops and "halted" is set. "steps" counts the steps run so far. '''

    def __init__(self, tm, step_limit):
        self.tm, self.step_limit = tm, step_limit
        self.halted = False
        self.steps = 0

    def __iter__(self):
        self.halted = False
        self.steps = 0
        config = Config()
        yield config
        for _ in range(self.step_limit):
            if not config.step(self.tm):
                self.halted = True
                return
            self.steps = config.steps
            yield config

def records(trace):
    ''' Yield (config, side) whenever the head stands on a cell further out (on that side) than ever before. '''
    lo = hi = 0
    for config in trace:
        pos = config.pos
        if pos > hi:
            hi = pos
            yield config, R
        elif pos < lo:
            lo = pos
            yield config, L

def record_cells(config, side):
    ''' At a record, everything is on one side of the head: return those cells in left-to-right order. '''
    tape = config.tape
    return tuple(tape.left) if side == R else tuple(reversed(tape.right))
