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

`DataObject` maps the JSON objects the API sends and receives onto Python
objects, through the `Field` attributes declared on its subclasses (see
`syncanoobjects.fields`).

Each `DataObject` class is registered under its name as it is declared, so a
`Connection` can offer any model as one of its attributes.

"""

from copy import deepcopy

from syncanoobjects.fields import Field


classes_by_name = {}


def find_by_name(name):
    """Returns the `DataObject` class declared with the bare name `name`,
    raising `KeyError` if there is none."""
    return classes_by_name[name]


class DataObjectMetaclass(type):

    """Gathers the fields a new `DataObject` class declares or inherits into
    its ``fields`` mapping, and registers the class by name."""

    def __new__(cls, name, bases, attrs):
        fields = {}
        for base in reversed(bases):
            fields.update(getattr(base, 'fields', {}))
        declared = dict((attrname, value) for attrname, value
            in attrs.items() if isinstance(value, Field))
        fields.update(declared)
        attrs['fields'] = fields

        new_cls = super(DataObjectMetaclass, cls).__new__(cls, name, bases, attrs)
        for attrname, field in declared.items():
            field.install(attrname, new_cls)

        classes_by_name[name] = new_cls
        return new_cls


class DataObject(object, metaclass=DataObjectMetaclass):

    """An object coded to and from a dictionary through its fields.

    The dictionary an object was decoded from is kept as its ``api_data``,
    and field values are decoded from it when first read. Keys no field
    declares stay in ``api_data`` and are encoded again by `to_dict()`.

    """

    def __init__(self, **kwargs):
        """Makes an object with the given values. Values for undeclared
        fields are kept as API data."""
        self.api_data = {}
        for name, value in kwargs.items():
            if name in self.fields:
                setattr(self, name, value)
            else:
                self.api_data[name] = value

    def __repr__(self):
        values = ' '.join('%s=%r' % (name, self.__dict__[name])
            for name in sorted(self.fields) if self.__dict__.get(name) is not None)
        return '<%s %s>' % (type(self).__name__, values)

    def to_dict(self):
        """Encodes the object as a dictionary.

        Fields set to ``None`` are left out, even if the data the object was
        decoded from had a value for them.

        """
        data = deepcopy(self.api_data)
        for name, field in self.fields.items():
            if name in self.__dict__ and self.__dict__[name] is None:
                data.pop(field.api_name, None)
                continue
            value = getattr(self, name)
            if value is not None:
                data[field.api_name] = field.encode(value)
        return data

    @classmethod
    def from_dict(cls, data):
        """Decodes a dictionary into a new object."""
        self = cls()
        self.update_from_dict(data)
        return self

    def update_from_dict(self, data):
        """Replaces the object's data with the decoded dictionary `data`,
        discarding any field values set on it."""
        if not isinstance(data, dict):
            raise TypeError("Cannot update %r from non-dictionary data %r"
                % (self, data))
        for name in self.fields:
            self.__dict__.pop(name, None)
        self.api_data = data
