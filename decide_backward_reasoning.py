#!/usr/bin/pypy3
# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
''' Backward reasoning: work back from the halting transitions and show the blank start can't be reached that way.

    The cheap version looks only at the transition graph on (state, symbol) pairs. The optional depth search tracks
    partial configurations (the state, the head's offset, and the cells the halting run is known to read). '''
from bb_cert import BackwardCert
from bb_decision import Budget, NonHalting, Reason, Unknown
from bb_tm import R
from collections import defaultdict
import logging

log = logging.getLogger(__name__)

def halt_reachers(tm):
    ''' The least set of (state, symbol) pairs containing the halting pairs, and every (f, r) whose transition goes to a
        state t with some (t, s) in the set. '''
    into = defaultdict(list)
    for f, r, w, d, t in tm.transitions():
        into[t].append((f, r))
    found = set(tm.halting_pairs())
    todo = sorted({f for f, _ in found})
    done = set()
    while todo:
        t = todo.pop()
        if t in done:
            continue
        done.add(t)
        for f, r in into[t]:
            if (f, r) not in found:
                found.add((f, r))
                todo.append(f)
    return found

def normalized(state, pos, known):
    ''' Partial configurations equal up to translation get the same key. '''
    return state, tuple(sorted((p - pos, s) for p, s in known.items()))

def predecessors(tm, state, pos, known):
    ''' Yield the partial configurations one step before (state, pos, known) which agree with it. '''
    for f, r, w, d, t in tm.transitions():
        if t != state:
            continue
        prev_pos = pos - 1 if d == R else pos + 1
        if known.get(prev_pos, w) != w:
            continue
        prev = dict(known)
        prev[prev_pos] = r
        yield f, prev_pos, prev

def backward_search(tm, max_depth):
    ''' Return (depth, None) if no partial configuration is depth steps before a halt, (depth, True) if some level is
        consistent with the blank tape in state A, or (max_depth, False) if we gave up. '''
    frontier = {}
    for f, r in tm.halting_pairs():
        frontier[normalized(f, 0, {0: r})] = (f, 0, {0: r})
    for depth in range(max_depth+1):
        if not frontier:
            return depth, None
        if any(state == 0 and not any(known.values()) for state, _, known in frontier.values()):
            return depth, True
        if depth == max_depth:
            break
        level = {}
        for state, pos, known in frontier.values():
            for prev in predecessors(tm, state, pos, known):
                level.setdefault(normalized(*prev), prev)
        frontier = level
    return max_depth, False

def decide(tm, budget=Budget()):
    reachers = halt_reachers(tm)
    if (0, 0) not in reachers:
        log.info('%s: %d (state, symbol) pairs lead to halting, not including the start', tm, len(reachers))
        return NonHalting(BackwardCert(str(tm), tuple(sorted(reachers))), 0)
    if not budget.max_depth:
        return Unknown(Reason.halt_reachable, 0)
    depth, outcome = backward_search(tm, budget.max_depth)
    if outcome is None:
        log.info('%s: nothing is %d steps before halting', tm, depth)
        return NonHalting(BackwardCert(str(tm), tuple(sorted(reachers)), depth), 0)
    log.debug('%s: backward search stopped at depth %d', tm, depth)
    return Unknown(Reason.halted if outcome else Reason.depth, 0)

if __name__ == '__main__':
    from bb_args import ArgumentParser, budget_args, budget_from_args, tm_args
    ap = ArgumentParser(description='Prove TMs run forever by reasoning backwards from their halting transitions.', parents=[tm_args(), budget_args()])
    ap.add_argument('-p', '--proof', help='Emit certificates, not just decisions.', action='store_true')
    args = ap.parse_args()
    budget = budget_from_args(args)
    for tm in args.machines:
        decision = decide(tm, budget)
        if decision and args.proof:
            print(decision.certificate.to_json())
        else:
            print(tm, 'infinite' if decision else decision, sep=', ')
