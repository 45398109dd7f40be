# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
import json

import pytest

from bb_cert import BouncerCert, CyclerCert, Pattern, Rep, from_json
from bb_decision import Budget
from bb_tm import L, TM
from decide import run_deciders

@pytest.mark.parametrize('text', ['1RB1RB_0LA---', '1RA---', '1LB1RA_1RA1LB', '1RA1LA_1RB---', '0RB---_0LA1LA'])
def test_json_round_trip(text):
    for name, decision in run_deciders(TM.from_text(text), Budget(max_steps=500, max_depth=5)):
        if decision:
            cert = decision.certificate
            fields = json.loads(cert.to_json())
            assert fields['cert_type'] == cert.cert_type and fields['tm'] == text
            assert from_json(cert.to_json()) == cert
            assert cert.machine == TM.from_text(text)

def test_bouncer_json():
    cert = BouncerCert('1LB1RA_1RA1LB', L, 1, (1, 6, 15, 28), (1, 5, 4), 2, 0, (1, Rep((1, 1))), 7)
    assert json.loads(cert.to_json())['items'] == [1, {'word': [1, 1]}]
    assert from_json(cert.to_json()) == cert
    assert hash(from_json(cert.to_json())) == hash(cert)

def test_display():
    assert str(Rep((1, 0))) == '(10)^n'
    assert str(Pattern(1, (1, 0), True, 1, (), False)) == '*01B>10^'
    assert str(CyclerCert('1RB1RB_0LA---', 1, 3)) == "CyclerCert(tm='1RB1RB_0LA---', i=1, j=3)"

def test_unknown_type():
    with pytest.raises(KeyError):
        from_json('{"cert_type": "magic", "tm": "1RA---"}')
