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

from datetime import datetime, timedelta, timezone
import unittest

from syncanoobjects import dataobject, fields, models


DEVICE = {
    'label': 'phone',
    'user': 1,
    'registration_id': '86b7',
    'device_id': 'd8a4',
    'is_active': True,
    'metadata': {'color': 'red'},
    'created_at': '2016-01-27T10:18:48.213712Z',
    'updated_at': '2016-01-27T10:18:48.213749Z',
    'links': {'self': '/v1/instances/inst/push_notifications/apns/devices/86b7/'},
}


class TestDataObjects(unittest.TestCase):

    def test_fields(self):
        names = set(models.APNSDevice.fields)
        # Inherited from Model and InstanceModel.
        self.assertTrue(set(['id', 'links', 'created_at', 'updated_at', 'instance_name']) <= names)
        self.assertTrue(set(['label', 'registration_id', 'device_id']) <= names)
        self.assertFalse('instance_name' in models.Instance.fields)

        self.assertEqual(models.APNSDevice.fields['label'].api_name, 'label')
        self.assertTrue(models.APNSDevice.label is models.APNSDevice.fields['label'])

    def test_registered_by_name(self):
        self.assertTrue(dataobject.find_by_name('APNSDevice') is models.APNSDevice)
        self.assertTrue(dataobject.find_by_name('Instance') is models.Instance)
        self.assertRaises(KeyError, dataobject.find_by_name, 'NoSuchModel')

    def test_sendable(self):
        flds = models.APNSDevice.fields
        self.assertTrue(flds['label'].sendable)
        self.assertFalse(flds['links'].sendable)
        self.assertFalse(flds['created_at'].sendable)
        self.assertFalse(flds['instance_name'].sendable)

    def test_decode(self):
        device = models.APNSDevice.from_dict(dict(DEVICE, last_seen='yesterday'))

        self.assertEqual(device.label, 'phone')
        self.assertEqual(device.is_active, True)
        self.assertEqual(device.metadata, {'color': 'red'})
        self.assertEqual(device.links, DEVICE['links'])
        self.assertEqual(device.created_at, datetime(2016, 1, 27, 10, 18, 48, 213712,
            tzinfo=timezone.utc))
        self.assertTrue(device.id is None)
        self.assertTrue(device.instance_name is None)

        # Undeclared keys are kept as data, not attributes.
        self.assertRaises(AttributeError, lambda: device.last_seen)
        self.assertEqual(device.to_dict()['last_seen'], 'yesterday')

    def test_encode(self):
        device = models.APNSDevice(label='tablet', user=2, is_active=False)
        self.assertEqual(device.to_dict(), {'label': 'tablet', 'user': 2, 'is_active': False})

        device = models.APNSDevice.from_dict(dict(DEVICE))
        device.label = 'tablet'
        data = device.to_dict()
        self.assertEqual(data['label'], 'tablet')
        self.assertEqual(data['created_at'], '2016-01-27T10:18:48.213712Z')

    def test_cleared_fields(self):
        device = models.APNSDevice.from_dict(dict(DEVICE))
        device.metadata = None
        data = device.to_dict()
        self.assertFalse('metadata' in data)
        self.assertEqual(data['label'], 'phone')

        del device.label
        self.assertTrue(device.label is None)
        self.assertFalse('label' in device.to_dict())

    def test_undeclared_keywords(self):
        device = models.APNSDevice(label='phone', color='red')
        self.assertEqual(device.api_data, {'color': 'red'})
        self.assertEqual(device.to_payload(), {'label': 'phone', 'color': 'red'})
        self.assertEqual(device.to_payload(),
            models.APNSDevice.from_attributes({'label': 'phone', 'color': 'red'}).to_payload())

    def test_update_from_dict(self):
        device = models.APNSDevice.from_dict(dict(DEVICE))
        device.label = 'tablet'
        device.update_from_dict({'label': 'watch', 'user': 3})
        self.assertEqual(device.label, 'watch')
        self.assertEqual(device.user, 3)
        self.assertTrue(device.links is None)
        self.assertFalse('metadata' in device.to_dict())

        self.assertRaises(TypeError, device.update_from_dict, ['not', 'a', 'dict'])

    def test_lists_and_dicts(self):
        books = models.Class.from_dict({
            'name': 'books',
            'schema': [{'name': 'title', 'type': 'string'}],
            'links': None,
        })
        self.assertEqual(books.schema, [{'name': 'title', 'type': 'string'}])
        self.assertTrue(books.links is None)
        self.assertTrue(models.Class.from_dict({'schema': None}).schema is None)

        user = models.User(username='john', groups=[1, 2])
        self.assertEqual(user.to_dict(), {'username': 'john', 'groups': [1, 2]})

    def test_repr(self):
        self.assertEqual(repr(models.Instance(name='books')), "<Instance name='books'>")


class TestDatetime(unittest.TestCase):

    def decode(self, stamp):
        return models.Instance.from_dict({'created_at': stamp}).created_at

    def test_decode(self):
        self.assertEqual(self.decode('2016-01-27T10:18:48Z'),
            datetime(2016, 1, 27, 10, 18, 48, tzinfo=timezone.utc))
        self.assertEqual(self.decode('2016-01-27T10:18:48.213712Z'),
            datetime(2016, 1, 27, 10, 18, 48, 213712, tzinfo=timezone.utc))
        self.assertEqual(self.decode('2016-01-27T10:18:48'),
            datetime(2016, 1, 27, 10, 18, 48, tzinfo=timezone.utc))

        # Offsets are converted to UTC.
        when = self.decode('2012-08-17T14:49:50-05:00')
        self.assertEqual(when, datetime(2012, 8, 17, 19, 49, 50, tzinfo=timezone.utc))
        self.assertEqual(when.tzinfo, timezone.utc)

        self.assertTrue(self.decode(None) is None)

    def test_decode_invalid(self):
        self.assertRaises(TypeError, self.decode, 'last tuesday')
        self.assertRaises(TypeError, self.decode, '2012-13-01T24:01:01Z')
        self.assertRaises(TypeError, self.decode, 1453889928)

    def test_encode(self):
        field = fields.Datetime()
        self.assertEqual(field.encode(datetime(2016, 1, 27, 10, 18, 48)),
            '2016-01-27T10:18:48Z')
        eastern = timezone(timedelta(hours=-5))
        self.assertEqual(field.encode(datetime(2016, 1, 27, 5, 18, 48, 5, tzinfo=eastern)),
            '2016-01-27T10:18:48.000005Z')
        self.assertRaises(TypeError, field.encode, '2016-01-27')
