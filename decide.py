#!/usr/bin/pypy3
# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
''' Run the deciders in turn on each machine, stopping at the first proof. '''
from bb_decision import Budget, Unknown, Reason
import decide_backward_reasoning
import decide_bouncers
import decide_cyclers
import decide_inductive
import decide_translated_cyclers
import logging

log = logging.getLogger(__name__)

DECIDERS = {
    'cyclers': decide_cyclers.decide,
    'tcyclers': decide_translated_cyclers.decide,
    'bouncers': decide_bouncers.decide,
    'backward': decide_backward_reasoning.decide,
    'inductive': decide_inductive.decide,
}

def run_deciders(tm, budget=Budget(), order=None):
    ''' Lazily yield (name, decision) for each decider in "order" (default: all, in registry order). '''
    for name in (DECIDERS if order is None else order):
        if name not in DECIDERS:
            raise ValueError(f'Unknown decider {name!r}; choose from {", ".join(DECIDERS)}')
        yield name, DECIDERS[name](tm, budget)

def decide(tm, budget=Budget(), order=None):
    ''' Return the first NonHalting decision, or else the last decider's Unknown. '''
    decision = Unknown(Reason.steps, 0)
    for name, decision in run_deciders(tm, budget, order):
        if decision:
            log.info('%s decided by %s', tm, name)
            return decision
    return decision

if __name__ == '__main__':
    from bb_args import ArgumentParser, budget_args, budget_from_args, tm_args
    from collections import Counter
    from tabulate import tabulate
    from tqdm import tqdm
    import sys
    import verify

    ap = ArgumentParser(description='Try to prove TMs run forever, using several deciders.', parents=[tm_args(), budget_args()])
    ap.add_argument('-o', '--order', help=f'Comma-separated deciders to try, in order (default: {",".join(DECIDERS)})',
                    type=lambda s: s.split(','), default=list(DECIDERS))
    ap.add_argument('-p', '--proof', help='Emit certificates, not just decisions.', action='store_true')
    ap.add_argument('-v', '--verbose', help='Log what the deciders find.', action='count', default=0)
    ap.add_argument('--verify', help='Check each certificate before reporting it.', action='store_true')
    args = ap.parse_args()
    logging.basicConfig(level=logging.WARNING - 10*args.verbose, format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    budget = budget_from_args(args, max_depth=20)

    tally = Counter()
    for tm in tqdm(args.machines, disable=len(args.machines) < 2):
        decided_by, decision = 'undecided', Unknown(Reason.steps)
        for name, decision in run_deciders(tm, budget, args.order):
            if decision:
                decided_by = name
                break
        if decision and args.verify and not verify.verify(decision):
            log.error('%s: %s certificate failed verification', tm, decided_by)
            decided_by = 'failed'
        tally[decided_by] += 1
        if decision and args.proof:
            tqdm.write(decision.certificate.to_json())
        else:
            tqdm.write(', '.join([str(tm), f'infinite ({decided_by})' if decision else str(decision)]))
    rows = [(name, tally[name]) for name in [*args.order, 'failed', 'undecided'] if tally[name]]
    print(tabulate(rows, headers=['decider', 'machines']), file=sys.stderr)
