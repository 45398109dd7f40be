# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
import pytest

from bb_tm import HALT, L, R, TM

BB5 = '1RB1LC_1RC1RB_1RD0LE_1LA1LD_---0LA'

def test_text_round_trip():
    assert str(TM.from_text(BB5)) == BB5
    assert str(TM.from_text(' 1RB---_0LA--- \n')) == '1RB---_0LA---'

def test_transition():
    tm = TM.from_text(BB5)
    assert (tm.states, tm.symbols) == (5, 2)
    assert tm.transition(0, 0) == (1, R, 1)
    assert tm.transition(2, 1) == (0, L, 4)
    assert tm.transition(4, 0)[2] == HALT
    assert tm.halting_pairs() == [(4, 0)]
    assert len(list(tm.transitions())) == 10

def test_three_symbols():
    tm = TM.from_text('1RB2LA1RA_2LA---1LB')
    assert (tm.states, tm.symbols) == (2, 3)
    assert tm.transition(0, 1) == (2, L, 0)
    assert tm.halting_pairs() == [(1, 1)]

def test_mirror():
    assert str(reversed(TM.from_text('1RB---_0LA1RB'))) == '1LB---_0RA1LB'

@pytest.mark.parametrize('text', ['1RB_0LA', '1RZ---_0LA---', '1RB---_0LA', '9RB---_0LA---', '1XB---_0LA---'])
def test_bad_text(text):
    with pytest.raises(ValueError):
        TM.from_text(text)

def test_bad_code():
    with pytest.raises(ValueError):
        TM(b'\x01\x00', 1, 2)
    with pytest.raises(ValueError):
        TM(bytes([1, 0, 3, 0, 0, 0]), 1, 2)

def test_immutable_and_hashable():
    tm = TM.from_text(BB5, seed=7)
    with pytest.raises(AttributeError):
        tm.states = 3
    assert tm == TM.from_text(BB5)
    assert len({tm, TM.from_text(BB5), TM.from_text('1RB---_0LA---')}) == 2
    assert tm.name == '5x2_7'
    assert TM.from_text('1RB---_0LA---').name == '1RB---_0LA---'
    assert eval(repr(tm)) == tm

def test_table():
    table = TM.from_text('1RB---_0LA1RB').table()
    assert '1RB' in table and '---' in table and '0LA' in table
    assert len(table.splitlines()) == 4
