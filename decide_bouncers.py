#!/usr/bin/pypy3
# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
''' Bouncers: machines which sweep back and forth over a tape of the form "walls and repeated words", where each sweep
    adds one copy of every repeated word. We spot candidates from the records (steps where the head reaches a new cell),
    guess a tape formula from them, and then prove formula(n) -> formula(n+1) by running the machine on the formula itself.

    Throughout, a "directional" configuration is (state, facing, left, right): the head sits between two cells and faces
    the one it will read next. The left and right stacks have their tops next to the head, as in bb_sim.Tape. '''
from bb_cert import BouncerCert, Rep
from bb_decision import Budget, NonHalting, Reason, Unknown
from bb_sim import Trace, record_cells, records
from bb_tm import HALT, L, R
from collections import defaultdict, namedtuple
import logging

log = logging.getLogger(__name__)

Snapshot = namedtuple('Snapshot', 'step cells')

def step_model(steps):
    ''' Fit four record steps with a polynomial in Newton form. Return ((t0, d1, d2), order) or None. '''
    t0, t1, t2, t3 = steps
    d1, d2, d3 = t1-t0, t2-t1, t3-t2
    if d3 - d2 != d2 - d1:
        return None
    dd = d2 - d1
    return (t0, d1, dd), (2 if dd else 1)

def insertions(a, b):
    ''' Return a list of (i, block) with as few blocks as possible, such that inserting each block before a[i] turns a into b.
        Blocks are placed as far right as possible. Return None if a is not a subsequence of b. '''
    n, g = len(a), len(b) - len(a)
    if g < 0:
        return None
    inf = len(b) + 1
    # k is the number of cells of b inserted so far. matched[i][k]: fewest blocks for a[i:] vs b[i+k:], if a[i] is not
    # preceded by an insertion. free[i][k]: the same, with an insertion allowed first.
    matched = [[inf]*(g+1) for _ in range(n+1)]
    free = [[inf]*(g+1) for _ in range(n+1)]
    matched[n][g] = 0
    for i in reversed(range(n+1)):
        if i < n:
            for k in range(g+1):
                if a[i] == b[i+k]:
                    matched[i][k] = free[i+1][k]
        best_later = inf
        for k in reversed(range(g+1)):
            free[i][k] = min(matched[i][k], best_later + 1)
            best_later = min(best_later, matched[i][k])
    if free[0][0] >= inf:
        return None

    out, k = [], 0
    for i in range(n+1):
        if free[i][k] != matched[i][k]:
            k2 = next(k2 for k2 in range(k+1, g+1) if matched[i][k2] + 1 == free[i][k])
            out.append((i, tuple(b[i+k:i+k2])))
            k = k2
    return out

def fit_formula(a, b, side=R):
    ''' Explain b as a with some blocks inserted, each block being one more copy of a word which a already repeats m >= 0 times.
        Return (items, n0): a formula of walls and Reps, and the exponent at which it spells out a.
        If every word is already repeated, one copy of each stays concrete, on the head's side of its Rep, so a proof can
        turn back inside it. '''
    inserts = insertions(a, b)
    if not inserts:
        return None
    runs, prev = [], 0
    for i, block in inserts:
        size, m = len(block), 0
        while i - (m+1)*size >= prev and a[i-(m+1)*size:i-m*size] == block:
            m += 1
        runs.append((prev, i, block, m))
        prev = i
    n0 = max(min(m for *_, m in runs) - 1, 0)
    items = []
    for start, i, block, m in runs:
        items.extend(a[start:i-m*len(block)])
        copies = block * (m-n0)
        items.extend((Rep(block), *copies) if side == R else (*copies, Rep(block)))
    items.extend(a[prev:])
    return tuple(items), n0

def expand(items, n):
    cells = []
    for item in items:
        if isinstance(item, Rep):
            cells.extend(item.word * n)
        else:
            cells.append(item)
    return tuple(cells)

def successor_formula(items):
    ''' formula(n+1), written with the same exponent n: each (v)^n becomes (v)^n v. '''
    return tuple(x for item in items for x in ((item, *item.word) if isinstance(item, Rep) else (item,)))

def normalize(items, strip_left):
    ''' Canonical form: walls are moved left through repeaters using (c u)^n c = c (u c)^n.
        Then the blanks at the far end (left if strip_left, else right) are dropped. '''
    items = list(items)
    i = 0
    while i+1 < len(items):
        rep, wall = items[i], items[i+1]
        if isinstance(rep, Rep) and not isinstance(wall, Rep) and wall == rep.word[0]:
            items[i:i+2] = [wall, Rep(rep.word[1:] + rep.word[:1])]
            i = max(i-1, 0)
        else:
            i += 1
    if strip_left:
        while items and items[0] == 0:
            del items[0]
    else:
        while items and items[-1] == 0:
            items.pop()
    return tuple(items)

def sides(left, right):
    ''' Normal form of a directional tape, given each side in left-to-right order. '''
    return normalize(left, True), normalize(right, False)

def shift(tm, state, facing, word, limit):
    ''' The head enters one copy of "word", facing into it. If it leaves by the far side in the same state, return the word
        it leaves behind (left-to-right). Otherwise (bouncing back, a state change, halting, looping or taking more than
        "limit" steps) return None. Either way, also return the number of machine steps taken inside the copy. '''
    left, right = ([], list(reversed(word))) if facing == R else (list(word), [])
    f, seen = facing, set()
    s = state
    n_steps = 0
    while True:
        if f == R and not right:
            return (tuple(left) if facing == R and s == state else None), n_steps
        if f == L and not left:
            return (tuple(reversed(right)) if facing == L and s == state else None), n_steps
        key = (s, f, tuple(left), tuple(right))
        if key in seen or n_steps >= limit:
            return None, n_steps
        seen.add(key)
        w, d, t = tm.transition(s, (right if f == R else left).pop())
        n_steps += 1
        if t == HALT:
            return None, n_steps
        (left if d == R else right).append(w)
        s, f = t, d

class OutOfBudget(Exception):
    ''' The Reason in args[0] ran out. '''

class Allowance:
    ''' The fitting and proof work one decide() call may still spend, and the formulas it has failed to prove. '''
    def __init__(self, budget):
        self.fit_cells = budget.max_fit_cells
        self.proof_steps = budget.max_proof_steps
        self.rejected = set()

    def spend_fit(self, cells):
        self.fit_cells -= cells
        if self.fit_cells < 0:
            raise OutOfBudget(Reason.fit)

    def spend_proof(self, steps):
        self.proof_steps -= steps
        if self.proof_steps < 0:
            raise OutOfBudget(Reason.proof)

def prove(tm, side, state, items, max_steps, allowance=None):
    ''' Run the machine symbolically from "items" (at a record on "side", in "state") until it reaches the successor
        formula in the same state and direction. Return the number of symbolic steps taken, or None.
        Machine steps inside repeaters count toward max_steps and the allowance, as do the symbolic steps. '''
    if side == R:
        left, right = list(items), []
        target = sides(successor_formula(items), ())
    else:
        left, right = [], list(reversed(items))
        target = sides((), successor_formula(items))
    start, facing, concrete = state, side, 0
    n_steps = work = 0
    while work < max_steps:
        n_steps += 1
        src, dst = (right, left) if facing == R else (left, right)
        top = src.pop() if src else 0
        if isinstance(top, Rep):
            word, inner = shift(tm, state, facing, top.word, max_steps - work)
            work += 1 + inner
            if allowance:
                allowance.spend_proof(1 + inner)
            if word is None:
                return None
            dst.append(Rep(word))
        else:
            w, d, t = tm.transition(state, top)
            work += 1
            if allowance:
                allowance.spend_proof(1)
            if t == HALT:
                return None
            (left if d == R else right).append(w)
            state, facing = t, d
            concrete += 1
        if work <= max_steps and concrete and facing == side and state == start and sides(left, right[::-1]) == target:
            return n_steps
    return None

class OrderExceeded(Exception):
    ''' The records fit a polynomial of higher order than the budget allows. '''

def fit(tm, side, state, points, budget, allowance):
    ''' Try to explain four same-group records with a proven tape formula. Return a BouncerCert, or None.
        Each formula is proved at most once per allowance; one that fails stays rejected. '''
    model = step_model([p.step for p in points])
    if model is None:
        return None
    (t0, d1, d2), order = model
    lengths = [len(p.cells) for p in points]
    growth = lengths[1] - lengths[0]
    if growth <= 0 or any(b - a != growth for a, b in zip(lengths, lengths[1:])):
        return None
    if order > budget.max_polynomial_order:
        raise OrderExceeded
    allowance.spend_fit((lengths[0]+1) * (growth+1))
    formula = fit_formula(points[0].cells, points[1].cells, side)
    if formula is None:
        return None
    items, n0 = formula
    allowance.spend_fit(sum(lengths))
    if any(expand(items, n0+k) != p.cells for k, p in enumerate(points)):
        log.debug('%s: formula %s misses records at steps %s', tm, items, [p.step for p in points])
        return None
    key = (side, state, items)
    if key in allowance.rejected:
        return None
    # Proving a formula that holds costs no more than the real steps from formula(n0+2) to formula(n0+3); allow twice that.
    proof_steps = prove(tm, side, state, items, 2 * (points[3].step - points[2].step), allowance)
    if proof_steps is None:
        log.debug('%s: formula %s does not lead to its successor', tm, items)
        allowance.rejected.add(key)
        return None
    return BouncerCert(str(tm), side, state, tuple(p.step for p in points), (t0, d1, d2), order, n0, items, proof_steps)

def decide(tm, budget=Budget()):
    ''' Group records by (side, state). Whenever a group grows, try each stride p up to max_stride over its newest
        record and the ones p, 2p and 3p before it. The first candidate which survives the symbolic proof wins. '''
    groups = defaultdict(list)
    trace = Trace(tm, budget.max_steps)
    allowance = Allowance(budget)
    n_records = 0
    order_exceeded = False
    for config, side in records(trace):
        n_records += 1
        if n_records > budget.max_records:
            return Unknown(Reason.records, trace.steps)
        group = groups[side, config.state]
        group.append(Snapshot(config.steps, record_cells(config, side)))
        for stride in range(1, min(budget.max_stride, (len(group)-1)//3) + 1):
            try:
                cert = fit(tm, side, config.state, group[-1-3*stride::stride], budget, allowance)
            except OrderExceeded:
                order_exceeded = True
                continue
            except OutOfBudget as e:
                log.debug('%s: out of %s budget at step %d', tm, e.args[0].name, trace.steps)
                return Unknown(e.args[0], trace.steps)
            if cert:
                log.info('%s bounces: %s from step %d', tm, cert.formula(), cert.steps[0])
                return NonHalting(cert, trace.steps)

    if trace.halted:
        return Unknown(Reason.halted, trace.steps)
    return Unknown(Reason.order if order_exceeded else Reason.steps, trace.steps)

if __name__ == '__main__':
    from bb_args import ArgumentParser, budget_args, budget_from_args, tm_args
    ap = ArgumentParser(description='Prove TMs run forever by finding and proving a bouncer tape formula.', parents=[tm_args(), budget_args()])
    ap.add_argument('-p', '--proof', help='Emit certificates, not just decisions.', action='store_true')
    args = ap.parse_args()
    budget = budget_from_args(args)
    for tm in args.machines:
        decision = decide(tm, budget)
        if decision and args.proof:
            print(decision.certificate.to_json())
        elif decision:
            print(tm, 'infinite', decision.certificate.formula(), sep=', ')
        else:
            print(tm, decision, sep=', ')
