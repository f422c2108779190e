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

The resources of the Syncano v1 API.

Resources living inside an instance carry the instance's name in the local
``instance_name`` field, which fills in the ``{instance_name}`` placeholder
of their endpoints.

"""

from syncanoobjects import fields
from syncanoobjects.meta import Endpoint, Meta
from syncanoobjects.model import Model


BATCH_ENDPOINT = Endpoint(['post'], '/v1/instances/{instance_name}/batch/')


class Instance(Model):

    name        = fields.Field()
    description = fields.Field()
    owner       = fields.Field(read_only=True)
    role        = fields.Field(read_only=True)
    metadata    = fields.Field()

    meta = Meta(
        name='instance',
        plural_name='instances',
        endpoints={
            'detail': {
                'methods': ['delete', 'patch', 'put', 'get'],
                'path': '/v1/instances/{name}/',
            },
            'list': {
                'methods': ['post', 'get'],
                'path': '/v1/instances/',
            },
        },
    )

    constraints = {
        'name': {'presence': True, 'length': {'minimum': 5}},
    }


class InstanceModel(Model):

    """A resource that belongs to an instance."""

    instance_name = fields.Field(local=True)


class Class(InstanceModel):

    name          = fields.Field()
    description   = fields.Field()
    schema        = fields.List(fields.Field())
    status        = fields.Field(read_only=True)
    objects_count = fields.Field(read_only=True)
    revision      = fields.Field(read_only=True)
    group         = fields.Field()
    group_permissions = fields.Field()
    other_permissions = fields.Field()
    metadata      = fields.Field()

    meta = Meta(
        name='class',
        plural_name='classes',
        endpoints={
            'detail': {
                'methods': ['delete', 'patch', 'put', 'get'],
                'path': '/v1/instances/{instance_name}/classes/{name}/',
            },
            'list': {
                'methods': ['post', 'get'],
                'path': '/v1/instances/{instance_name}/classes/',
            },
            'batch': BATCH_ENDPOINT,
        },
    )

    constraints = {
        'instance_name': {'presence': True},
        'name': {'presence': True},
    }


class User(InstanceModel):

    username = fields.Field()
    password = fields.Field()
    user_key = fields.Field(read_only=True)
    profile  = fields.Field()
    groups   = fields.List(fields.Field())

    meta = Meta(
        name='user',
        plural_name='users',
        endpoints={
            'detail': {
                'methods': ['delete', 'patch', 'put', 'get'],
                'path': '/v1/instances/{instance_name}/users/{id}/',
            },
            'list': {
                'methods': ['post', 'get'],
                'path': '/v1/instances/{instance_name}/users/',
            },
            'batch': BATCH_ENDPOINT,
        },
    )

    constraints = {
        'instance_name': {'presence': True},
        'username': {'presence': True},
        'password': {'presence': True},
    }


class APNSDevice(InstanceModel):

    """An Apple push notification device registered with an instance."""

    label           = fields.Field()
    user            = fields.Field()
    registration_id = fields.Field()
    device_id       = fields.Field()
    is_active       = fields.Field()
    metadata        = fields.Field()

    meta = Meta(
        name='apnsdevice',
        plural_name='apnsdevices',
        endpoints={
            'detail': {
                'methods': ['delete', 'patch', 'put', 'get'],
                'path': '/v1/instances/{instance_name}/push_notifications/apns/devices/{registration_id}/',
            },
            'list': {
                'methods': ['post', 'get'],
                'path': '/v1/instances/{instance_name}/push_notifications/apns/devices/',
            },
            'batch': BATCH_ENDPOINT,
        },
    )

    constraints = {
        'instance_name': {'presence': True},
        'user': {'presence': True},
        'registration_id': {'presence': True, 'format': '[0-9a-fA-F]{64}'},
        'device_id': {'presence': True},
    }


class InstanceInvitation(InstanceModel):

    email   = fields.Field()
    role    = fields.Field()
    key     = fields.Field(read_only=True)
    inviter = fields.Field(read_only=True)
    state   = fields.Field(read_only=True)

    meta = Meta(
        name='invitation',
        plural_name='invitations',
        endpoints={
            'detail': {
                'methods': ['delete', 'get'],
                'path': '/v1/instances/{instance_name}/invitations/{id}/',
            },
            'list': {
                'methods': ['post', 'get'],
                'path': '/v1/instances/{instance_name}/invitations/',
            },
            'batch': BATCH_ENDPOINT,
        },
    )

    constraints = {
        'instance_name': {'presence': True},
        'email': {'presence': True, 'email': True},
        'role': {'presence': True, 'inclusion': ['full', 'write', 'read']},
    }
