#!/usr/bin/pypy3
# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from bb_cert import TCyclerCert
from bb_decision import Budget, NonHalting, Reason, Unknown
from bb_sim import Trace
from bb_tm import L, R
from collections import namedtuple
import logging

log = logging.getLogger(__name__)

# lo/hi: the extreme head positions since the previous record (inclusive of this one).
Record = namedtuple('Record', 'step side state pos lo hi window')

def decide(tm, budget=Budget()):
    ''' Find records i < j (head further out than ever before, on the same side, in the same state) such that the
        machine's excursion back from pos(i) between them only reads cells which are the same at i and j.
        Then steps i..j repeat forever, translated by d = pos(j) - pos(i).
        Earliest j wins; among its partners, earliest i. '''
    radius_max = budget.max_window_radius
    records = []
    trace = Trace(tm, budget.max_steps)
    lo = hi = seg_lo = seg_hi = 0
    window_exceeded = False
    steps = 0
    for config in trace:
        steps, pos = config.steps, config.pos
        seg_lo, seg_hi = min(seg_lo, pos), max(seg_hi, pos)
        if lo <= pos <= hi:
            continue
        side = R if pos > hi else L
        lo, hi = min(lo, pos), max(hi, pos)
        record = Record(steps, side, config.state, pos, seg_lo, seg_hi, config.tape.window(side, radius_max))
        seg_lo = seg_hi = pos

        match = None
        run_lo, run_hi = record.lo, record.hi  # Extremes over (earlier.step, record.step].
        for earlier in reversed(records):
            if earlier.side == side and earlier.state == record.state:
                radius = max(0, earlier.pos - run_lo if side == R else run_hi - earlier.pos)
                if radius > radius_max:
                    window_exceeded = True
                elif earlier.window[:radius] == record.window[:radius]:
                    match = earlier, radius
            run_lo, run_hi = min(run_lo, earlier.lo), max(run_hi, earlier.hi)
        if match:
            earlier, radius = match
            d = pos - earlier.pos
            log.info('%s translated-cycles: steps %d..%d shift by %d (window %d)', tm, earlier.step, steps, d, radius)
            return NonHalting(TCyclerCert(str(tm), earlier.step, steps, d, radius), steps)
        records.append(record)

    if trace.halted:
        return Unknown(Reason.halted, steps)
    return Unknown(Reason.window if window_exceeded else Reason.steps, steps)

if __name__ == '__main__':
    from bb_args import ArgumentParser, budget_args, budget_from_args, tm_args
    ap = ArgumentParser(description='Prove TMs run forever by finding a translated cycle.', parents=[tm_args(), budget_args()])
    ap.add_argument('-p', '--proof', help='Emit certificates, not just decisions.', action='store_true')
    args = ap.parse_args()
    budget = budget_from_args(args)
    for tm in args.machines:
        decision = decide(tm, budget)
        if decision and args.proof:
            print(decision.certificate.to_json())
        else:
            print(tm, 'infinite' if decision else decision, sep=', ')
