# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from argparse import ArgumentParser

import pytest

from bb_args import budget_args, budget_from_args, tm_args
from bb_decision import Budget
from bb_tm import TM

def parse(*argv):
    return ArgumentParser(parents=[tm_args(), budget_args()]).parse_args(argv)

def test_machines_from_command_line_and_file(tmp_path):
    path = tmp_path / 'machines.txt'
    path.write_text('1RB1RB_0LA---\n\n1RA---, infinite\n')
    args = parse('1RB---_1LA---', '-i', str(path))
    assert [str(tm) for tm in args.machines] == ['1RB---_1LA---', '1RB1RB_0LA---', '1RA---']
    assert len(args.machines) == 3 and args.machines[2] == TM.from_text('1RA---')

def test_no_machines():
    assert len(parse().machines) == 0

def test_bad_machine():
    with pytest.raises(ValueError):
        list(parse('1RZ---').machines)

def test_budget():
    assert budget_from_args(parse()) == Budget()
    args = parse('--max-steps', '500', '--max-width', '1')
    assert budget_from_args(args) == Budget(max_steps=500, max_width=1)
    assert budget_from_args(args, max_depth=20, max_steps=7) == Budget(max_steps=500, max_width=1, max_depth=20)
