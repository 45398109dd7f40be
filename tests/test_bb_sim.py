# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from bb_sim import Config, Tape, Trace, record_cells, records, step
from bb_tm import L, R, TM

HALTS_AT_2 = TM.from_text('1RB---_1LA---')
MARCH = TM.from_text('1RA---')

def test_tape_never_stores_outer_blanks():
    tape = Tape()
    tape.move(0, R)
    assert tape.key() == ((), 0, ())
    tape.move(1, R)
    tape.move(0, L)
    assert tape.key() == ((), 1, ())
    assert tape == Tape((), 1, ())

def test_tape_indexing():
    tape = Tape([1, 2], 3, [5, 4])
    assert [tape[i] for i in range(-3, 4)] == [0, 1, 2, 3, 4, 5, 0]
    assert len(tape) == 5
    assert str(tape) == '12[3]45'

def test_tape_window():
    tape = Tape([1, 2, 3], 0, [4])
    assert tape.window(R, 0) == ()
    assert tape.window(R, 2) == (3, 2)
    assert tape.window(R, 5) == (3, 2, 1, 0, 0)
    assert tape.window(L, 2) == (4, 0)

def test_step_is_pure():
    start = Config()
    one = step(HALTS_AT_2, start)
    assert (start.state, start.pos, start.steps) == (0, 0, 0)
    assert (one.state, one.pos, one.steps) == (1, 1, 1)
    two = step(HALTS_AT_2, one)
    assert (two.state, two.pos, two.tape.head) == (0, 0, 1)
    assert two.halting(HALTS_AT_2)
    assert step(HALTS_AT_2, two) is None

def test_trace_replays():
    trace = Trace(HALTS_AT_2, 100)
    assert [c.steps for c in trace] == [0, 1, 2]
    assert trace.halted and trace.steps == 2
    assert [c.pos for c in trace] == [0, 1, 0]
    trace = Trace(MARCH, 5)
    assert [c.pos for c in trace] == list(range(6))
    assert not trace.halted and trace.steps == 5

def test_records():
    assert [(c.steps, side) for c, side in records(Trace(HALTS_AT_2, 100))] == [(1, R)]
    found = [(c.steps, side, record_cells(c, side)) for c, side in records(Trace(MARCH, 3))]
    assert found == [(1, R, (1,)), (2, R, (1, 1)), (3, R, (1, 1, 1))]
    found = [(c.steps, side, record_cells(c, side)) for c, side in records(Trace(reversed(MARCH), 2))]
    assert found == [(1, L, (1,)), (2, L, (1, 1))]
