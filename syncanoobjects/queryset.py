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

A `QuerySet` describes a request for the resources of one `Model` class:
which endpoint to use, which filters to send, how many resources per page
and in which order.

Building a queryset makes no requests. Every builder method returns a new
queryset, leaving the one it was called on unchanged, so a base queryset can
be shared safely:

>>> devices = connection.APNSDevice.please()
>>> newest = devices.list(is_active=True).ordering('desc').page_size(10)

List querysets are delivered when their contents are first used, as with
any other sequence:

>>> [device.label for device in newest]

Single-resource lookups and deletes are sent with `request()`:

>>> device = devices.get(registration_id='...').request()

Creating and updating resources (`create()`, `bulk_create()`, `update()`,
`get_or_create()`, `update_or_create()`) and `first()` send their requests
right away.

Filters given to any of these methods are split against the endpoint's
path: the ones naming a placeholder of the path fill it in, and the others
are sent as query parameters.

"""

from copy import copy
import logging

from syncanoobjects.http import BatchError, NotFoundError, RequestError
from syncanoobjects.model import Model
from syncanoobjects.validation import ValidationError


log = logging.getLogger('syncanoobjects.queryset')

ORDERINGS = ('asc', 'desc')


class QuerySetError(Exception):
    """An exception raised when a queryset is used in a way its action does
    not support."""
    pass


class SequenceProxy(object):

    """An abstract class implementing the sequence protocol by proxying it to
    an instance attribute.

    `SequenceProxy` instances act like sequences by forwarding all sequence
    method calls to their `entries` attributes.

    """

    def make_sequence_method(methodname):
        """Makes a new function that proxies calls to `methodname` to the
        `entries` attribute of the instance on which the function is called as
        an instance method."""
        def seqmethod(self, *args, **kwargs):
            # Proxy these methods to self.entries.
            return getattr(self.entries, methodname)(*args, **kwargs)
        seqmethod.__name__ = methodname
        return seqmethod

    __len__      = make_sequence_method('__len__')
    __getitem__  = make_sequence_method('__getitem__')
    __iter__     = make_sequence_method('__iter__')
    __reversed__ = make_sequence_method('__reversed__')
    __contains__ = make_sequence_method('__contains__')


class QuerySet(SequenceProxy):

    """A lazily sent request for resources of a `Model` class."""

    def __init__(self, model, connection=None, properties=None,
                 constraints=None):
        self.model = model
        self.connection = connection
        self.constraints = constraints
        self.properties = {}
        if connection is not None:
            for name, value in connection.default_properties().items():
                if name in model.fields:
                    self.properties[name] = value
        self.properties.update(properties or {})
        self.action = 'list'
        self.query = {}
        self._raw = False
        self._delivered = False
        self._result = None

    def __repr__(self):
        return '<QuerySet %s %s %r>' % (self.model.__name__, self.action,
            dict(self.properties, **self.query))

    @property
    def meta(self):
        return self.model.meta

    def _clone(self, action=None, properties=None):
        qs = copy(self)
        qs.properties = dict(self.properties)
        qs.properties.update(properties or {})
        qs.query = dict(self.query)
        if action is not None:
            qs.action = action
        qs._delivered = False
        qs._result = None
        return qs

    def _lookup(self, action='list', properties=None):
        """Returns a clone for finding every match of the filters, whatever
        page size or raw results this queryset asks for."""
        qs = self._clone(action, properties)
        qs._raw = False
        qs.query.pop('page_size', None)
        return qs

    # Builders

    def list(self, properties=None, **filters):
        """Returns a queryset listing the resources matching the filters."""
        return self._clone('list', dict(properties or {}, **filters))

    def get(self, properties=None, **filters):
        """Returns a queryset fetching the one resource matching the filters.

        If the filters fill in every placeholder of the ``detail`` endpoint,
        the resource is fetched from there and any other filters are not
        used. Otherwise the first resource of the filtered list is the match.
        If there is no match, the request raises `NotFoundError`.

        """
        return self._clone('get', dict(properties or {}, **filters))

    def delete(self, properties=None, **filters):
        """Returns a queryset deleting the resources matching the filters.

        If the filters fill in every placeholder of the ``detail`` endpoint,
        that one resource is deleted. Otherwise each resource of the filtered
        list is deleted in turn.

        """
        return self._clone('delete', dict(properties or {}, **filters))

    def page_size(self, value):
        """Returns a queryset requesting `value` resources per page.

        A list with an explicit page size is delivered as that single page.

        """
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError('Page size must be a positive integer, not %r' % (value,))
        qs = self._clone()
        qs.query['page_size'] = value
        return qs

    def ordering(self, direction='asc'):
        """Returns a queryset asking the API for resources in ``asc`` or
        ``desc`` order of creation."""
        direction = str(direction).lower()
        if direction not in ORDERINGS:
            raise ValueError('Ordering must be one of %s, not %r'
                % (', '.join(ORDERINGS), direction))
        qs = self._clone()
        qs.query['ordering'] = direction
        return qs

    def raw(self):
        """Returns a queryset whose result is the API's page of results
        itself: a dictionary of ``objects``, ``next`` and ``prev``."""
        qs = self._clone()
        qs._raw = True
        return qs

    # Delivery

    def get_connection(self):
        if self.connection is None:
            raise ValueError('Cannot request %r with no connection' % (self,))
        return self.connection

    @property
    def entries(self):
        if self.action != 'list' or self._raw:
            raise QuerySetError("'%s' queryset is not a sequence; use request()"
                % (self.action,))
        if not self._delivered:
            self.deliver()
        return self._result

    def deliver(self):
        """Sends the queryset's request and keeps its result."""
        self._result = self.request()
        self._delivered = True

    def request(self):
        """Sends the queryset's request and returns its result.

        Each call sends the request again.

        """
        connection = self.get_connection()
        if self.action == 'get':
            return self._request_get(connection)
        if self.action == 'delete':
            return self._request_delete(connection)
        return self._request_list(connection)

    def _split(self, endpoint, properties=None):
        """Returns the path properties and query parameters for a request to
        `endpoint`."""
        if properties is None:
            properties = self.properties
        path_properties, query = self.meta.split_properties(endpoint, properties)
        for name in list(query):
            field = self.model.fields.get(name)
            if field is not None and field.local:
                del query[name]
        query.update(self.query)
        return path_properties, query

    def _hydrate(self, data, connection, properties=None):
        if properties is None:
            properties = self.properties
        return self._constrain(self.model.from_response(data,
            properties=properties, connection=connection))

    def _constrain(self, obj):
        if self.constraints is not None:
            obj.constraints = self.constraints
        return obj

    def _request_page(self, connection, url=None):
        method = self.meta.find_allowed_method('list', 'GET')
        if url is not None:
            return connection.request(method, url)
        path_properties, query = self._split('list')
        path = self.meta.resolve_endpoint_path('list', path_properties)
        return connection.request(method, path, query=query)

    def _request_list(self, connection):
        page = self._request_page(connection)
        if self._raw:
            envelope = dict(page)
            envelope.setdefault('objects', [])
            envelope.setdefault('next', None)
            envelope.setdefault('prev', None)
            return envelope

        objects = [self._hydrate(data, connection) for data in page['objects']]
        if 'page_size' not in self.query:
            while page.get('next'):
                log.debug('Following %s list to %s', self.meta.name, page['next'])
                page = self._request_page(connection, page['next'])
                objects.extend(self._hydrate(data, connection)
                    for data in page['objects'])
        return objects

    def iterator(self):
        """Yields the listed resources, requesting one page at a time as it
        goes."""
        connection = self.get_connection()
        page = self._request_page(connection)
        while True:
            for data in page['objects']:
                yield self._hydrate(data, connection)
            if not page.get('next'):
                break
            page = self._request_page(connection, page['next'])

    def _request_get(self, connection):
        if self.meta.has_path_properties('detail', self.properties):
            method = self.meta.find_allowed_method('detail', 'GET')
            path = self.meta.resolve_endpoint_path('detail', self.properties)
            return self._hydrate(connection.request(method, path), connection)

        page = self._clone('list').page_size(1).raw().request()
        if not page['objects']:
            raise NotFoundError('No %s matches %r' % (self.meta.name, self.properties),
                status=404)
        return self._hydrate(page['objects'][0], connection)

    def _request_delete(self, connection):
        if self.meta.has_path_properties('detail', self.properties):
            method = self.meta.find_allowed_method('detail', 'DELETE')
            path = self.meta.resolve_endpoint_path('detail', self.properties)
            connection.request(method, path)
            return None

        objects = self._lookup().request()
        if not objects:
            raise NotFoundError('No %s matches %r' % (self.meta.name, self.properties),
                status=404)
        for obj in objects:
            obj.delete(connection)
        return None

    # Immediate requests

    def first(self, properties=None, **filters):
        """Returns the first resource of the filtered list, or ``None`` if
        the list is empty."""
        qs = self.list(properties, **filters)
        page = qs.page_size(1).raw().request()
        if not page['objects']:
            return None
        return qs._hydrate(page['objects'][0], qs.get_connection())

    def build(self, data):
        """Makes a new, unsaved instance from the queryset's properties and
        `data`."""
        attributes = dict((name, value) for name, value
            in self.properties.items() if name in self.model.fields)
        attributes.update(data)
        return self._constrain(self.model.from_attributes(attributes,
            connection=self.connection))

    def create(self, data=None, **kwargs):
        """Creates a resource from `data` and returns it as the API saved
        it."""
        obj = self.build(dict(data or {}, **kwargs))
        return obj.save(self.get_connection())

    def bulk_create(self, objects):
        """Creates all `objects` with a single batch request and returns them
        as the API saved them.

        `objects` may be model instances or dictionaries of their data. All
        of them are validated before the request is sent, and all of them
        must share one batch endpoint (that is, one instance); otherwise
        raises `ValueError`. If the batch request fails, or the API reports
        that any of the creates in it failed, raises `BatchError` and returns
        nothing.

        """
        connection = self.get_connection()
        objs = [obj if isinstance(obj, Model) else self.build(obj)
            for obj in objects]
        if not objs:
            return []

        for obj in objs:
            errors = obj.validate()
            if errors:
                raise ValidationError(errors)

        method = self.meta.find_allowed_method('list', 'POST')
        requests = []
        for obj in objs:
            requests.append({
                'method': method.upper(),
                'path': self.meta.resolve_endpoint_path('list', obj),
                'body': obj.to_payload(),
            })

        batch_method = self.meta.find_allowed_method('batch', 'POST')
        batch_paths = set()
        for obj in objs:
            source = dict(self.properties)
            source.update((name, value) for name, value
                in obj.local_properties().items() if value is not None)
            batch_paths.add(self.meta.resolve_endpoint_path('batch', source))
        if len(batch_paths) != 1:
            raise ValueError('Cannot batch %s for different batch endpoints: %s'
                % (self.meta.plural_name, ', '.join(sorted(batch_paths))))
        batch_path = batch_paths.pop()

        try:
            results = connection.request(batch_method, batch_path,
                data={'requests': requests})
        except RequestError as exc:
            raise BatchError('Batch request creating %d %s failed: %s'
                % (len(objs), self.meta.plural_name, exc),
                status=exc.status, reason=exc.reason, content=exc.content) from exc

        if not isinstance(results, list) or len(results) != len(objs):
            raise BatchError('Batch response for %d %s has %s results'
                % (len(objs), self.meta.plural_name,
                   len(results) if isinstance(results, list) else 'no'),
                results=results)
        failed = [result for result in results
            if not 200 <= result.get('code', 0) < 300]
        if failed:
            raise BatchError('%d of %d batched %s creates failed'
                % (len(failed), len(objs), self.meta.name), results=results)

        for obj, result in zip(objs, results):
            obj._connection = connection
            obj.update_from_response(result['content'])
        return objs

    def update(self, properties, fields):
        """Updates the resource matching `properties` with a ``PATCH`` of
        `fields` and returns it as the API saved it.

        If `properties` don't fill in the ``detail`` endpoint's placeholders,
        the resource is looked up with `get()` first.

        """
        connection = self.get_connection()
        properties = dict(self.properties, **properties)
        if not self.meta.has_path_properties('detail', properties):
            target = self._lookup('get', properties).request()
            properties.update(target.local_properties())
        else:
            target = properties
        method = self.meta.find_allowed_method('detail', 'PATCH')
        path = self.meta.resolve_endpoint_path('detail', target)
        content = connection.request(method, path, data=dict(fields))
        return self._hydrate(content, connection, properties)

    def get_or_create(self, properties, defaults=None):
        """Returns the resource matching `properties`, creating it from
        `properties` and `defaults` if there is none.

        An existing resource is returned as it is; `defaults` are only used
        for creating.

        """
        try:
            return self.get(properties).request()
        except NotFoundError:
            data = dict(properties)
            data.update(defaults or {})
            return self.create(data)

    def update_or_create(self, properties, fields, defaults=None):
        """Updates the resource matching `properties` with `fields`, or
        creates it from `properties` and `defaults` (`fields` if no defaults
        are given) if there is none."""
        try:
            return self.update(properties, fields)
        except NotFoundError:
            data = dict(properties)
            data.update(fields if defaults is None else defaults)
            return self.create(data)
