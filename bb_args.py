# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from argparse import Action, ArgumentParser, FileType
from bb_decision import Budget
from bb_tm import TM
from collections.abc import Sequence
from dataclasses import fields

def tm_args():
    """Return an ArgumentParser that lets the user list TMs and/or files of them, parsed into 'machines': Sequence[TM]. """
    ap = ArgumentParser(add_help=False)
    ap.add_argument('-i', '--input', help='Include all machines from this file (standard text format, one per line)', type=FileType('r'), action=_AddMachineList)
    ap.add_argument('machines', help='Standard text TMs', nargs='*', action=_AddMachineList, default=MachineList())
    return ap

def budget_args():
    """Return an ArgumentParser with one option per Budget field, e.g. --max-steps. Unset options keep Budget's defaults. """
    ap = ArgumentParser(add_help=False)
    group = ap.add_argument_group('budget')
    for field in fields(Budget):
        group.add_argument('--' + field.name.replace('_', '-'), type=int, metavar='N', help=f'(default: {field.default})')
    return ap

def budget_from_args(args, **defaults):
    """Build a Budget from parsed budget_args() options. Keyword arguments override Budget's defaults (not the user's options). """
    values = dict(defaults)
    for field in fields(Budget):
        value = getattr(args, field.name, None)
        if value is not None:
            values[field.name] = value
    return Budget(**values)

class _AddMachineList(Action):
    def __call__(self, parser, namespace, values, option_string=None):
        if values and values is not self.default:
            namespace.machines._lists.append(values)

class MachineList(Sequence):
    ''' The machines named on the command line, in order. Files are read (and text parsed) on first use. '''
    def __init__(self):
        self._lists = []
        self._tms = None

    @property
    def tms(self):
        if self._tms is None:
            self._tms = [self._tm(text) for l in self._lists for text in l if text.strip()]
        return self._tms

    def __len__(self):
        return len(self.tms)

    def __getitem__(self, i):
        return self.tms[i]

    def __iter__(self):
        return iter(self.tms)

    @staticmethod
    def _tm(text):
        if isinstance(text, TM):
            return text
        text = text.split(',')[0].strip()
        return TM.from_text(text)
