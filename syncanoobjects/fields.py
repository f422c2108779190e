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

Fields are class attributes for `Model` subclasses that provide data coding
functionality for your properties.

"""

from datetime import datetime, timezone


class Field(object):

    """A property for encoding object attributes as dictionary values and
    decoding dictionary values into object attributes.

    Declare a `Field` instance for each attribute of a `DataObject` that
    should be encoded to or decoded from a dictionary. Use a `Field` instance
    directly for strings, numbers, and boolean values; use one of the `Field`
    subclasses in this module when the value needs converted.

    Two flags control how a field takes part in requests sent to the API:

    * ``read_only`` fields are assigned by the server (identifiers, links,
      timestamps). They are decoded from responses but never sent.

    * ``local`` fields exist only on the client, usually to fill in a
      placeholder of an endpoint path (such as the name of the instance a
      resource lives in). They are never sent and are kept when an object is
      refreshed from a response.

    """

    def __init__(self, api_name=None, default=None, read_only=False,
                 local=False):
        """Sets the field's matching deserialization field and default value.

        Optional parameter `api_name` is the key of this field's matching
        value in a dictionary. If not given, the attribute name of the field
        when its class was defined is used.

        Optional parameter `default` is the default value to use for this
        attribute when the dictionary to decode does not contain a value.
        `default` can be a value or callable function. If `default` is a
        callable function, it is passed the object to decode into and should
        return the default value of the attribute.

        """
        self.api_name = api_name
        self.default  = default
        self.read_only = read_only
        self.local = local

    def install(self, attrname, cls):
        self.attrname = attrname
        if self.api_name is None:
            self.api_name = attrname
        self.of_cls = cls

    @property
    def sendable(self):
        """Whether the field's value belongs in request bodies."""
        return not (self.read_only or self.local)

    def __get__(self, obj, cls):
        """Returns the field's value on the given object instance, or the
        field's default value if no value for the field is available.

        Note the field's value will be decoded from API data if necessary,
        raising any exceptions that the field's `decode()` method may raise.

        """
        if obj is None:
            # Yield the real field instance when gotten through the class.
            return self

        if self.attrname not in obj.__dict__:
            try:
                value = obj.api_data[self.api_name]
            except KeyError:
                if callable(self.default):
                    value = self.default(obj)
                else:
                    value = self.default
            else:
                value = self.decode(value)
            # Store the value so we need decode it only once.
            obj.__dict__[self.attrname] = value

        return obj.__dict__[self.attrname]

    def __set__(self, obj, value):
        obj.__dict__[self.attrname] = value

    def __delete__(self, obj):
        # Delete both the instance and API data, so we'll get a real
        # attribute miss next time and return the field's default.
        obj.__dict__.pop(self.attrname, None)
        obj.api_data.pop(self.api_name, None)

    def decode(self, value):
        """Decodes a dictionary value into a `DataObject` attribute value.

        This implementation returns the `value` parameter unchanged.

        """
        return value

    def encode(self, value):
        """Encodes a `DataObject` attribute value into a dictionary value.

        This implementation returns the `value` parameter unchanged.

        """
        return value


class List(Field):

    """A field representing a homogeneous list of data.

    The elements of the list are decoded through another field specified when
    the `List` is declared.

    """

    def __init__(self, fld, **kwargs):
        super(List, self).__init__(**kwargs)
        self.fld = fld

    def install(self, attrname, cls):
        super(List, self).install(attrname, cls)

        # Make sure our content field knows its owner too.
        self.fld.install(attrname, cls)

    def decode(self, value):
        if value is None:
            return None
        return [self.fld.decode(v) for v in value]

    def encode(self, value):
        return [self.fld.encode(v) for v in value]


class Dict(List):

    """A field representing a homogeneous mapping of data, such as the
    ``links`` of a resource."""

    def decode(self, value):
        if value is None:
            return None
        return dict((k, self.fld.decode(v)) for k, v in value.items())

    def encode(self, value):
        return dict((k, self.fld.encode(v)) for k, v in value.items())


class Datetime(Field):

    """A field representing a timestamp.

    The API sends timestamps such as ``2016-01-27T10:18:48.213712Z``; the
    fraction and the ``Z`` suffix are optional, and numeric UTC offsets are
    accepted too. Decoded values are aware `datetime` instances in UTC.

    """

    dateformats = (
        "%Y-%m-%dT%H:%M:%S.%f%z",
        "%Y-%m-%dT%H:%M:%S%z",
        "%Y-%m-%dT%H:%M:%S.%f",
        "%Y-%m-%dT%H:%M:%S",
    )
    utc = timezone.utc

    def __init__(self, dateformats=None, **kwargs):
        super(Datetime, self).__init__(**kwargs)
        if dateformats is not None:
            self.dateformats = tuple(dateformats)

    def decode(self, value):
        if value is None:
            if callable(self.default):
                return self.default()
            return self.default
        if not isinstance(value, str):
            raise TypeError('Value to decode %r is not a valid date time stamp' % (value,))
        for dateformat in self.dateformats:
            try:
                decoded = datetime.strptime(value, dateformat)
            except ValueError:
                continue
            if decoded.tzinfo is None:
                decoded = decoded.replace(tzinfo=Datetime.utc)
            return decoded.astimezone(Datetime.utc)
        raise TypeError('Value to decode %r is not a valid date time stamp' % (value,))

    def encode(self, value):
        """Encodes a `datetime` as a UTC timestamp string ending in ``Z``.

        Naive values are taken to be in UTC already.

        """
        if not isinstance(value, datetime):
            raise TypeError('Value to encode %r is not a datetime' % (value,))
        if value.tzinfo is not None:
            value = value.astimezone(Datetime.utc).replace(tzinfo=None)
        return value.isoformat() + 'Z'
