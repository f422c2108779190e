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

syncanoobjects is a client library for the Syncano v1 REST API.

Each kind of resource the API offers (instances, classes, users, devices,
invitations) is a `Model` subclass: a real Python class with fields for its
data, endpoint metadata saying where the API keeps it, and constraints its
instances are validated against before anything is sent.

syncanoobjects has:

* models that can validate, save and delete themselves

* querysets for listing, filtering, paging and ordering resources, with
  get-or-create and update-or-create helpers

* HTTP through the `httplib2` library, with JSON coding by `simplejson`


Example
=======

    >>> from syncanoobjects import Connection
    >>> connection = Connection(api_key='a1b2c3', instance_name='my-instance')
    >>> Device = connection.APNSDevice
    >>> device = Device(label='phone', user=1, device_id='d8a4',
    ...                 registration_id='86b7...').save()
    >>> device.is_new()
    False
    >>> [d.label for d in Device.please().list().ordering('desc')]
    ['phone']


Querysets
=========

`Model.please()` returns a `QuerySet` for the model. Querysets are built
without sending anything; list querysets are sent when their contents are
first used, lookups and deletes when their `request()` method is called::

    >>> Device.please().get(registration_id='86b7...').request()
    >>> Device.please().get_or_create({'registration_id': '86b7...'},
    ...                               {'label': 'phone', 'user': 1})

"""

__version__ = '0.1.0'
__author__ = 'Syncano'

from syncanoobjects.dataobject import DataObject
from syncanoobjects import fields
from syncanoobjects.http import (
    Connection, RequestError, BadRequest, Unauthorized, Forbidden,
    NotFoundError, ServerError, BadResponse, BatchError)
from syncanoobjects.meta import (
    Endpoint, Meta, EndpointNotFound, MissingParameterError,
    UnsupportedMethodError)
from syncanoobjects.model import Model, BoundModel
from syncanoobjects.models import (
    Instance, Class, User, APNSDevice, InstanceInvitation)
from syncanoobjects.queryset import QuerySet, QuerySetError
from syncanoobjects.validation import ValidationError, validate

__all__ = (
    'fields', 'DataObject', 'Connection', 'Endpoint', 'Meta', 'Model',
    'BoundModel', 'QuerySet', 'validate',
    'Instance', 'Class', 'User', 'APNSDevice', 'InstanceInvitation',
    'RequestError', 'BadRequest', 'Unauthorized', 'Forbidden',
    'NotFoundError', 'ServerError', 'BadResponse', 'BatchError',
    'EndpointNotFound', 'MissingParameterError', 'UnsupportedMethodError',
    'QuerySetError', 'ValidationError',
)
