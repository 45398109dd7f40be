# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
import pytest

from bb_decision import Budget, NonHalting, Reason, Unknown

@pytest.mark.parametrize('fields', [
    {'max_polynomial_order': 3},
    {'max_steps': -1},
    {'max_width': 0},
    {'max_stride': 0},
])
def test_budget_rejects(fields):
    with pytest.raises(ValueError):
        Budget(**fields)

def test_budget_minimums():
    assert Budget(max_width=1, max_stride=1, max_steps=0, max_polynomial_order=0)

def test_decisions():
    assert NonHalting(None)
    assert not Unknown(Reason.fit, 7)
    assert str(Unknown(Reason.proof)) == 'undecided (proof)'
