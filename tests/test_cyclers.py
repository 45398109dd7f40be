# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from bb_cert import CyclerCert
from bb_decision import Budget, NonHalting, Reason, Unknown
from bb_tm import TM
from decide_cyclers import decide
from verify import verify

def test_period_two():
    tm = TM.from_text('1RB1RB_0LA---')
    decision = decide(tm)
    assert decision == NonHalting(CyclerCert('1RB1RB_0LA---', 1, 3), 3)
    assert verify(decision)

def test_cycle_from_the_start():
    decision = decide(TM.from_text('0RB---_0LA---'))
    assert decision.certificate == CyclerCert('0RB---_0LA---', 0, 2)

def test_halting():
    assert decide(TM.from_text('1RB---_1LA---')) == Unknown(Reason.halted, 2)

def test_translation_is_not_a_cycle():
    assert decide(TM.from_text('1RA---'), Budget(max_steps=100)) == Unknown(Reason.steps, 100)
