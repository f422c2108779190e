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

`Model` is the base class of the API's resources. A model class declares
its fields, its endpoint metadata (a `syncanoobjects.meta.Meta`) and the
constraints its instances must satisfy before being sent to the API:

>>> class Class(Model):
...     name   = fields.Field()
...     schema = fields.Field()
...     instance_name = fields.Field(local=True)
...
...     meta = Meta(name='class', plural_name='classes', endpoints={...})
...     constraints = {'instance_name': {'presence': True}}
...

Instances know whether they were saved yet, and can save and delete
themselves. Lists and lookups go through the class's `please()` queryset.

"""

import logging

from syncanoobjects import fields
from syncanoobjects.dataobject import DataObject
from syncanoobjects.validation import ValidationError, validate


log = logging.getLogger('syncanoobjects.model')


class Model(DataObject):

    """A resource of the API that can be validated, saved and deleted.

    A model is new until the API has returned it; persisted resources always
    carry the ``links`` the API assigns them.

    """

    meta = None
    constraints = {}

    id         = fields.Field(read_only=True)
    links      = fields.Dict(fields.Field(), read_only=True)
    created_at = fields.Datetime(read_only=True)
    updated_at = fields.Datetime(read_only=True)

    def __init__(self, **kwargs):
        self._connection = None
        super(Model, self).__init__(**kwargs)

    @classmethod
    def please(cls, connection=None, **properties):
        """Returns a `QuerySet` of this model on the given connection,
        starting with the given properties."""
        from syncanoobjects.queryset import QuerySet
        return QuerySet(cls, connection=connection, properties=properties)

    @classmethod
    def set_constraints(cls, constraints):
        """Returns a `BoundModel` making instances of this class that
        validate against `constraints` instead of the class's own."""
        return BoundModel(cls, constraints=constraints)

    @classmethod
    def from_attributes(cls, attributes, connection=None):
        """Makes a new, unsaved instance from a dictionary of attribute
        values.

        Values for declared fields are set as attributes; any others are
        kept as API data, so they are still sent when the instance is saved.

        """
        self = cls(**attributes)
        self._connection = connection
        return self

    @classmethod
    def from_response(cls, data, properties=None, connection=None):
        """Makes an instance from a decoded API response body.

        Local fields are not part of responses; their values are taken from
        `properties`, the properties the request was made with.

        """
        self = cls.from_dict(data)
        self._connection = connection
        for name, field in self.fields.items():
            if field.local and properties and properties.get(name) is not None:
                setattr(self, name, properties[name])
        return self

    def local_properties(self):
        return dict((name, getattr(self, name)) for name, field
            in self.fields.items() if field.local)

    def update_from_response(self, data):
        """Refreshes the instance from a decoded API response body, keeping
        its local field values."""
        local = self.local_properties()
        self.update_from_dict(data)
        for name, value in local.items():
            if value is not None:
                setattr(self, name, value)

    def to_payload(self):
        """Encodes the instance as a request body, leaving out read-only and
        local fields."""
        data = self.to_dict()
        for field in self.fields.values():
            if not field.sendable:
                data.pop(field.api_name, None)
        return data

    def get_connection(self, connection=None):
        if connection is None:
            connection = self._connection
        if connection is None:
            raise ValueError('Cannot request %r with no connection' % (self,))
        return connection

    def is_new(self):
        return self.links is None

    def validate(self):
        """Returns the messages of the fields failing the model's constraints,
        or ``None`` if all of them pass."""
        return validate(self, self.constraints)

    def save(self, connection=None):
        """Saves the instance to the API and returns it, updated with the
        API's response.

        New instances are created with a ``POST`` to the ``list`` endpoint;
        saved ones are sent back to their ``detail`` endpoint with the first
        method it allows of ``PUT``, ``PATCH`` and ``POST``.

        If the instance fails validation, raises `ValidationError` without
        making any request.

        """
        errors = self.validate()
        if errors:
            raise ValidationError(errors)

        connection = self.get_connection(connection)
        if self.is_new():
            endpoint = 'list'
            method = self.meta.find_allowed_method(endpoint, 'POST')
        else:
            endpoint = 'detail'
            method = self.meta.find_allowed_method(endpoint, 'PUT', 'PATCH', 'POST')
        path = self.meta.resolve_endpoint_path(endpoint, self)

        content = connection.request(method, path, data=self.to_payload())
        log.debug('Saved %s, now updating it from the response', self.meta.name)
        self._connection = connection
        if content is not None:
            self.update_from_response(content)
        return self

    def delete(self, connection=None):
        """Deletes the resource the instance represents with a ``DELETE`` to
        its ``detail`` endpoint."""
        connection = self.get_connection(connection)
        method = self.meta.find_allowed_method('detail', 'DELETE')
        path = self.meta.resolve_endpoint_path('detail', self)
        connection.request(method, path)
        log.debug('Deleted %s at %s', self.meta.name, path)


class BoundModel(object):

    """A factory for instances of one `Model` class, bound to a
    `Connection`.

    Calling a `BoundModel` makes an instance of its model that saves and
    deletes through the connection. Instances that have an ``instance_name``
    field start with the connection's default instance name.

    """

    def __init__(self, model, connection=None, constraints=None):
        self.model = model
        self.connection = connection
        self.constraints = constraints

    def __repr__(self):
        return '<BoundModel %s on %r>' % (self.model.__name__, self.connection)

    def __call__(self, **kwargs):
        if self.connection is not None:
            for name, value in self.connection.default_properties().items():
                if name in self.model.fields:
                    kwargs.setdefault(name, value)
        obj = self.model.from_attributes(kwargs, connection=self.connection)
        if self.constraints is not None:
            obj.constraints = self.constraints
        return obj

    @property
    def meta(self):
        return self.model.meta

    def please(self, **properties):
        from syncanoobjects.queryset import QuerySet
        return QuerySet(self.model, connection=self.connection,
            properties=properties, constraints=self.constraints)

    def set_constraints(self, constraints):
        return BoundModel(self.model, connection=self.connection,
            constraints=constraints)
