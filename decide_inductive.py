#!/usr/bin/pypy3
# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
''' Inductive proofs: find a set of configuration classes which contains the start and is closed under TM steps.
    A class knows the state, the head symbol, and up to "width" cells on each side; past those, each side is either
    blank forever or (once we've had to forget something) arbitrary. If no class in the closure halts, nothing does. '''
from bb_cert import InductiveCert, Pattern
from bb_decision import Budget, NonHalting, Reason, Unknown
from bb_tm import HALT, R
from collections import deque
import logging

log = logging.getLogger(__name__)

START = Pattern(0, (), False, 0, (), False)

def push(cells, is_open, symbol, width):
    ''' Put a symbol next to the head on one side. Returns the new (cells, is_open). '''
    cells = (symbol,) + cells
    if not is_open:
        while cells and cells[-1] == 0:
            cells = cells[:-1]
    if len(cells) > width:
        return cells[:width], True
    return cells, is_open

def pop(cells, is_open, symbols):
    ''' Yield the possible (head, cells, is_open) when the head moves onto a side. '''
    if cells:
        yield cells[0], cells[1:], is_open
    elif is_open:
        for s in range(symbols):
            yield s, (), True
    else:
        yield 0, (), False

def successors(tm, p, width):
    ''' The classes covering one step from class p, or None if p's transition halts. '''
    w, d, t = tm.transition(p.state, p.head)
    if t == HALT:
        return None
    if d == R:
        left, left_open = push(p.left, p.left_open, w, width)
        return [Pattern(t, left, left_open, head, right, right_open) for head, right, right_open in pop(p.right, p.right_open, tm.symbols)]
    right, right_open = push(p.right, p.right_open, w, width)
    return [Pattern(t, left, left_open, head, right, right_open) for head, left, left_open in pop(p.left, p.left_open, tm.symbols)]

def closed_set(tm, width, budget):
    ''' BFS from START. Returns (classes, successor index lists) or a Reason for failing. '''
    index = {START: 0}
    classes, links = [START], []
    todo = deque([START])
    iterations = 0
    while todo:
        iterations += 1
        if iterations > budget.max_fixpoint_iterations:
            return Reason.iterations
        p = todo.popleft()
        nexts = successors(tm, p, width)
        if nexts is None:
            log.debug('%s: width %d reaches halting class %s', tm, width, p)
            return Reason.halt_reachable
        out = []
        for q in nexts:
            if q not in index:
                if len(classes) >= budget.max_classes:
                    return Reason.classes
                index[q] = len(classes)
                classes.append(q)
                todo.append(q)
            out.append(index[q])
        links.append(tuple(out))
    return classes, links

def decide(tm, budget=Budget()):
    ''' Try widths 1..max_width; the first closed class set wins. Budget failures take precedence in the result. '''
    failure = Reason.halt_reachable
    for width in range(1, budget.max_width+1):
        found = closed_set(tm, width, budget)
        if isinstance(found, Reason):
            if found != Reason.halt_reachable:
                failure = found
            continue
        classes, links = found
        log.info('%s: %d classes of width %d are closed under stepping', tm, len(classes), width)
        return NonHalting(InductiveCert(str(tm), width, tuple(classes), tuple(links)), 0)
    return Unknown(failure, 0)

if __name__ == '__main__':
    from bb_args import ArgumentParser, budget_args, budget_from_args, tm_args
    ap = ArgumentParser(description='Prove TMs run forever by finding a closed set of configuration classes.', parents=[tm_args(), budget_args()])
    ap.add_argument('-p', '--proof', help='Emit certificates, not just decisions.', action='store_true')
    ap.add_argument('-r', '--regex', help='Show the closed set as a regular expression.', action='store_true')
    args = ap.parse_args()
    budget = budget_from_args(args)
    for tm in args.machines:
        decision = decide(tm, budget)
        if decision and args.proof:
            print(decision.certificate.to_json())
        elif decision and args.regex:
            print(tm, 'infinite', decision.certificate.to_regex(), sep=', ')
        else:
            print(tm, 'infinite' if decision else decision, sep=', ')
