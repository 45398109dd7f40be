# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
''' Non-halting certificates. Each is an immutable, self-describing record (decider tag + machine text + witness data)
    which verify.py can check without redoing the search that found it. '''
from bb_tm import R, TM, ithl
from dataclasses import asdict, dataclass
from typing import ClassVar
import json

CERT_TYPES = {}

def _cert_type(cls):
    CERT_TYPES[cls.cert_type] = cls
    return cls

def _tuplify(x):
    return tuple(map(_tuplify, x)) if isinstance(x, list) else x

@dataclass(frozen=True)
class Rep:
    ''' A repeated word in a tape formula: word^n, for a symbolic exponent n shared by the whole formula. '''
    word: tuple

    def __str__(self):
        return '(' + ''.join(map(str, self.word)) + ')^n'

@dataclass(frozen=True)
class Pattern:
    ''' A class of configurations: the state, the head symbol, and up to "width" known cells on each side (nearest first).
        Past the known cells, a side is blank forever, or (if open) arbitrary. '''
    state: int
    left: tuple
    left_open: bool
    head: int
    right: tuple
    right_open: bool

    def __str__(self):
        return ''.join(['*' if self.left_open else '0^', *map(str, reversed(self.left)), f'{ithl(self.state)}>{self.head}',
                        *map(str, self.right), '*' if self.right_open else '0^'])

class Certificate:
    cert_type: ClassVar[str]

    @property
    def machine(self):
        return TM.from_text(self.tm)

    def to_json(self):
        return json.dumps(dict(cert_type=self.cert_type, **asdict(self)))

    @classmethod
    def from_dict(cls, fields):
        return cls(**{k: _tuplify(v) for k, v in fields.items()})

@_cert_type
@dataclass(frozen=True)
class CyclerCert(Certificate):
    ''' The configurations at steps i and j are identical. '''
    cert_type: ClassVar[str] = 'cyclers'
    tm: str
    i: int
    j: int

@_cert_type
@dataclass(frozen=True)
class TCyclerCert(Certificate):
    ''' Steps i and j are records (on the side d points to) in the same state, and the window_radius cells behind the head match.
        Between them, the head never strays further than window_radius cells back from its step-i position. '''
    cert_type: ClassVar[str] = 'tcyclers'
    tm: str
    i: int
    j: int
    d: int
    window_radius: int

@_cert_type
@dataclass(frozen=True)
class BouncerCert(Certificate):
    ''' At steps[0] the machine is in "state" at a record on "side", with the tape formula "items" at n = n0.
        Formula(n) leads to formula(n+1) (in proof_steps symbolic steps), so the machine bounces forever.
        steps are the record steps the formula was fitted to; step_model = (t0, d1, d2) is their Newton-form polynomial fit. '''
    cert_type: ClassVar[str] = 'bouncers'
    tm: str
    side: int
    state: int
    steps: tuple
    step_model: tuple
    order: int
    n0: int
    items: tuple
    proof_steps: int

    @classmethod
    def from_dict(cls, fields):
        fields = dict(fields)
        items = tuple(item if isinstance(item, int) else Rep(_tuplify(item['word'])) for item in fields.pop('items'))
        return cls(items=items, **{k: _tuplify(v) for k, v in fields.items()})

    def formula(self):
        cells = ' '.join(map(str, self.items))
        return f'{cells} {ithl(self.state)}>' if self.side == R else f'<{ithl(self.state)} {cells}'

@_cert_type
@dataclass(frozen=True)
class BackwardCert(Certificate):
    ''' halt_reachers is a set of (state, symbol) pairs closed under "can step into" and containing every halting pair, but not (0, 0).
        If depth > 0, that analysis was not enough: instead, no partial configuration is depth steps away from halting. '''
    cert_type: ClassVar[str] = 'backward'
    tm: str
    halt_reachers: tuple
    depth: int = 0

@_cert_type
@dataclass(frozen=True)
class InductiveCert(Certificate):
    ''' A set of configuration classes that contains the initial configuration and is closed under stepping the TM.
        successors[k] lists the indices of classes covering the successors of classes[k]. '''
    cert_type: ClassVar[str] = 'inductive'
    tm: str
    width: int
    classes: tuple
    successors: tuple

    @classmethod
    def from_dict(cls, fields):
        fields = dict(fields)
        classes = tuple(Pattern(**{k: _tuplify(v) for k, v in p.items()}) for p in fields.pop('classes'))
        return cls(classes=classes, **{k: _tuplify(v) for k, v in fields.items()})

    def to_regex(self):
        ''' Return a regexp representation of the closed class set. Requires automata-lib.
            (Like the CTL displays, this output is for people; the certificate's fields are what gets verified.) '''
        from automata.fa import gnfa, nfa
        import re

        tm = self.machine
        digits = set(map(str, range(tm.symbols)))
        transitions = {'I': {'': set()}, 'F': {}}
        for k, p in enumerate(self.classes):
            path = [*map(str, reversed(p.left)), ithl(p.state), str(p.head), *map(str, p.right)]
            nodes = [f'c{k}_{i}' for i in range(len(path)+1)]
            for node in nodes:
                transitions[node] = {}
            transitions['I'][''].add(nodes[0])
            for node, symbol, next_node in zip(nodes, path, nodes[1:]):
                transitions[node][symbol] = {next_node}
            for node, is_open in ((nodes[0], p.left_open), (nodes[-1], p.right_open)):
                for s in (digits if is_open else {'0'}):
                    transitions[node].setdefault(s, set()).add(node)
            transitions[nodes[-1]][''] = {'F'}
        input_symbols = digits.union(map(ithl, range(tm.states)))
        marvin = nfa.NFA(states=set(transitions), input_symbols=input_symbols, transitions=transitions, initial_state='I', final_states={'F'})
        expr = gnfa.GNFA.from_nfa(marvin).to_regex()
        # Mark which digit the head is on, as in the CTL displays.
        return re.sub(r'([A-Z])', r'\1>', expr)

def from_json(text):
    fields = json.loads(text)
    return CERT_TYPES[fields.pop('cert_type')].from_dict(fields)
