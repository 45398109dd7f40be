# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from bb_sim import Trace
from bb_tm import TM
from trace_tm import main, rows

def test_rows():
    trace = Trace(TM.from_text('1RB---_1LA---'), 10)
    assert list(rows(trace, 0, 1)) == [(0, 0, [0, 0]), (1, 1, [1, 0]), (0, 0, [1, 1])]

def test_text(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(TM.from_text('1RA---', seed=3), 3) == ['bb_1x2_3.txt']
    assert (tmp_path / 'bb_1x2_3.txt').read_text().splitlines() == ['A0', '1A0', '11A0', '111A0']

def test_images(tmp_path, monkeypatch):
    from PIL import Image
    monkeypatch.chdir(tmp_path)
    fns = main(TM.from_text('1LB1RA_1RA1LB', seed=9), 20, png=True, svg=True)
    assert fns == ['bb_2x2_9.txt', 'bb_2x2_9.png', 'bb_2x2_9.svg']
    with Image.open(tmp_path / 'bb_2x2_9.png') as img:
        assert img.size == (6, 21)
    assert (tmp_path / 'bb_2x2_9.svg').read_text().count('<rect') == 1 + 6*21
