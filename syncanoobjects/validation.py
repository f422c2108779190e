# Copyright (c) 2009-2010 Six Apart Ltd.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice,
#   this list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of Six Apart Ltd. nor the names of its contributors may
#   be used to endorse or promote products derived from this software without
#   specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

"""

Constraint validation for model attributes.

Constraints are declared per field as a dictionary of rules:

>>> constraints = {
...     'name': {'presence': True, 'length': {'maximum': 64}},
...     'role': {'inclusion': ['full', 'write', 'read']},
... }
>>> validate({'role': 'owner'}, constraints)
{'name': ["name can't be blank"], 'role': ['role owner is not included in the list']}

`validate()` returns ``None`` when every constraint passes.

"""

from collections.abc import Mapping
import numbers
import re

from syncanoobjects.meta import read_property


EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


class ValidationError(ValueError):
    """An exception raised when a model fails validation before a request.

    The failing fields and their messages are available as `errors`.

    """

    def __init__(self, errors=None):
        self.errors = dict(errors or {})
        messages = [message for field_errors in self.errors.values()
            for message in field_errors]
        super(ValidationError, self).__init__('; '.join(messages) or 'Validation failed')


def is_blank(value):
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return not value
    return False


def check_presence(field, value, option):
    if option and is_blank(value):
        return "%s can't be blank" % field


def check_length(field, value, option):
    if value is None:
        return
    try:
        length = len(value)
    except TypeError:
        return '%s has an incorrect length' % field
    if 'is' in option and length != option['is']:
        return '%s is the wrong length (should be %d characters)' % (field, option['is'])
    if 'minimum' in option and length < option['minimum']:
        return '%s is too short (minimum is %d characters)' % (field, option['minimum'])
    if 'maximum' in option and length > option['maximum']:
        return '%s is too long (maximum is %d characters)' % (field, option['maximum'])


def check_format(field, value, option):
    if value is None:
        return
    message = None
    if isinstance(option, Mapping):
        message = option.get('message')
        option = option['pattern']
    if not isinstance(value, str) or re.fullmatch(option, value) is None:
        return message or '%s is invalid' % field


def check_inclusion(field, value, option):
    if value is None:
        return
    if isinstance(option, Mapping):
        option = option['within']
    if value not in option:
        return '%s %s is not included in the list' % (field, value)


def check_exclusion(field, value, option):
    if value is None:
        return
    if isinstance(option, Mapping):
        option = option['within']
    if value in option:
        return '%s %s is restricted' % (field, value)


NUMERIC_COMPARISONS = (
    ('greater_than', lambda v, o: v > o, 'greater than'),
    ('greater_than_or_equal_to', lambda v, o: v >= o, 'greater than or equal to'),
    ('less_than', lambda v, o: v < o, 'less than'),
    ('less_than_or_equal_to', lambda v, o: v <= o, 'less than or equal to'),
    ('equal_to', lambda v, o: v == o, 'equal to'),
)


def check_numericality(field, value, option):
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        return '%s is not a number' % field
    if not isinstance(option, Mapping):
        return
    if option.get('only_integer') and not isinstance(value, numbers.Integral):
        return '%s must be an integer' % field
    for name, compare, words in NUMERIC_COMPARISONS:
        if name in option and not compare(value, option[name]):
            return '%s must be %s %s' % (field, words, option[name])


def check_email(field, value, option):
    if value is None or not option:
        return
    if not isinstance(value, str) or EMAIL_PATTERN.match(value) is None:
        return '%s is not a valid email' % field


validators = {
    'presence': check_presence,
    'length': check_length,
    'format': check_format,
    'inclusion': check_inclusion,
    'exclusion': check_exclusion,
    'numericality': check_numericality,
    'email': check_email,
}


def validate(attributes, constraints):
    """Checks `attributes` against `constraints`.

    `attributes` may be a mapping or any object whose attributes hold the
    values. Returns a dictionary of field names to lists of messages for the
    fields that failed, or ``None`` if none did. Unknown rule names raise
    `ValueError`.

    """
    errors = {}
    for field, rules in (constraints or {}).items():
        value = read_property(attributes, field)
        for rule, option in rules.items():
            try:
                check = validators[rule]
            except KeyError:
                raise ValueError('Unknown constraint %r for field %r' % (rule, field))
            message = check(field, value, option)
            if message is not None:
                errors.setdefault(field, []).append(message)
    return errors or None
