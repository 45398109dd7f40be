# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from dataclasses import dataclass
from enum import IntEnum

class Reason(IntEnum):
    ''' Why a decider abstained. Budget limits come first; the last two are verdicts of the method itself. '''
    steps, window, records, order, fit, proof, classes, iterations, depth, halted, halt_reachable = range(11)

@dataclass(frozen=True)
class Budget:
    max_steps: int = 10_000
    max_window_radius: int = 64        # Translated Cyclers
    max_polynomial_order: int = 2      # Bouncers (capped at quadratic)
    max_records: int = 4_000           # Bouncers
    max_stride: int = 8                # Bouncers: records of one group per sweep
    max_fit_cells: int = 1_000_000     # Bouncers: alignment and expansion work per call
    max_proof_steps: int = 100_000     # Bouncers: symbolic steps per call, including those inside repeaters
    max_classes: int = 10_000          # Inductive
    max_fixpoint_iterations: int = 100_000
    max_width: int = 3                 # Inductive: known cells per side
    max_depth: int = 0                 # Backward Reasoning: 0 means (state, symbol) analysis only

    def __post_init__(self):
        if not 0 <= self.max_polynomial_order <= 2:
            raise ValueError(f'Bouncer polynomial order must be in 0..2, not {self.max_polynomial_order}')
        for name, value in vars(self).items():
            if value < 0:
                raise ValueError(f'{name} must be non-negative, not {value}')
        for name in ('max_stride', 'max_width'):
            if getattr(self, name) < 1:
                raise ValueError(f'{name} must be at least 1, not {getattr(self, name)}')

@dataclass(frozen=True)
class Halts:
    ''' Reserved for analyses that prove halting. The deciders here never return it. '''
    steps: int

@dataclass(frozen=True)
class NonHalting:
    certificate: object
    steps: int = 0

    def __bool__(self):
        return True

@dataclass(frozen=True)
class Unknown:
    reason: Reason
    steps: int = 0

    def __bool__(self):
        return False

    def __str__(self):
        return f'undecided ({self.reason.name})'
