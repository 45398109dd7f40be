#!/usr/bin/pypy3
# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from bb_cert import CyclerCert
from bb_decision import Budget, NonHalting, Reason, Unknown
from bb_sim import Trace
import logging

log = logging.getLogger(__name__)

def decide(tm, budget=Budget()):
    ''' Look for a configuration which exactly repeats an earlier one. The first repeat found has the least j, hence the least i. '''
    seen = {}
    trace = Trace(tm, budget.max_steps)
    steps = 0
    for config in trace:
        steps = config.steps
        key = config.key()
        i = seen.setdefault(key, steps)
        if i != steps:
            log.info('%s cycles: step %d repeats step %d', tm, steps, i)
            return NonHalting(CyclerCert(str(tm), i, steps), steps)
    return Unknown(Reason.halted if trace.halted else Reason.steps, steps)

if __name__ == '__main__':
    from bb_args import ArgumentParser, budget_args, budget_from_args, tm_args
    ap = ArgumentParser(description='Prove TMs loop forever by finding an exactly repeated configuration.', parents=[tm_args(), budget_args()])
    ap.add_argument('-p', '--proof', help='Emit certificates, not just decisions.', action='store_true')
    args = ap.parse_args()
    budget = budget_from_args(args)
    for tm in args.machines:
        decision = decide(tm, budget)
        if decision and args.proof:
            print(decision.certificate.to_json())
        else:
            print(tm, 'infinite' if decision else decision, sep=', ')
