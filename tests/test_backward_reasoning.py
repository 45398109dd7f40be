# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from bb_cert import BackwardCert
from bb_decision import Budget, NonHalting, Reason, Unknown
from bb_tm import TM
from decide_backward_reasoning import backward_search, decide, halt_reachers
from verify import verify

# A never switches to B, so B's halting transition can't be reached from the start.
UNREACHABLE_HALT = '1RA1LA_1RB---'
# Every (state, symbol) pair can lead to the halting one, but no configuration is 2 steps before it.
DEPTH_TWO = '0RB---_0LA1LA'

def test_pairs():
    assert halt_reachers(TM.from_text(UNREACHABLE_HALT)) == {(1, 0), (1, 1)}
    assert halt_reachers(TM.from_text(DEPTH_TWO)) == {(0, 0), (0, 1), (1, 0), (1, 1)}

def test_pair_level_proof():
    decision = decide(TM.from_text(UNREACHABLE_HALT))
    assert decision == NonHalting(BackwardCert(UNREACHABLE_HALT, ((1, 0), (1, 1)), 0), 0)
    assert verify(decision)

def test_depth_search():
    tm = TM.from_text(DEPTH_TWO)
    assert decide(tm) == Unknown(Reason.halt_reachable, 0)
    assert backward_search(tm, 5) == (2, None)
    decision = decide(tm, Budget(max_depth=5))
    assert decision.certificate == BackwardCert(DEPTH_TWO, ((0, 0), (0, 1), (1, 0), (1, 1)), 2)
    assert verify(decision)
    assert decide(tm, Budget(max_depth=1)) == Unknown(Reason.depth, 0)

def test_halting():
    tm = TM.from_text('1RB---_1LA---')
    assert backward_search(tm, 5) == (2, True)
    assert decide(tm, Budget(max_depth=5)) == Unknown(Reason.halted, 0)

def test_no_halting_transitions():
    decision = decide(TM.from_text('1RB1LB_1LA1RA'))
    assert decision.certificate.halt_reachers == ()
    assert verify(decision)
