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

Endpoint metadata for `Model` classes.

Every resource kind declares a `Meta` naming its endpoints: a key such as
``list`` or ``detail`` mapped to the HTTP methods the API allows there and a
path template with ``{placeholder}`` segments. The placeholders are filled in
from the properties of a model instance (or a plain mapping of filters) when
a request is built.

"""

from collections.abc import Mapping
from string import Formatter
from urllib.parse import quote


class EndpointNotFound(LookupError):
    """An exception raised when a model's metadata has no endpoint by the
    requested name."""
    pass


class MissingParameterError(ValueError):
    """An exception raised when an endpoint path can't be built because the
    source object lacks values for some of its placeholders."""
    pass


class UnsupportedMethodError(ValueError):
    """An exception raised when none of the requested HTTP methods is allowed
    on an endpoint."""
    pass


def read_property(source, name):
    """Returns the value of property `name` of `source`, or `None`.

    Mappings are read by key and any other object by attribute.

    """
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


class Endpoint(object):

    """One named endpoint of a resource: its allowed methods and path."""

    def __init__(self, methods, path):
        self.methods = tuple(m.lower() for m in methods)
        self.path = path
        self.properties = tuple(field for _, field, _, _
            in Formatter().parse(path) if field)

    def __repr__(self):
        return '<Endpoint %s %s>' % ('|'.join(self.methods), self.path)

    def __eq__(self, other):
        if not isinstance(other, Endpoint):
            return NotImplemented
        return (self.methods, self.path) == (other.methods, other.path)

    __hash__ = object.__hash__


class Meta(object):

    """Configuration of a resource kind: its names and its endpoints.

    `endpoints` maps each endpoint key to an `Endpoint`, or to a dictionary
    with ``methods`` and ``path`` keys:

    >>> ClassMeta = Meta(
    ...     name='class',
    ...     plural_name='classes',
    ...     endpoints={
    ...         'detail': {
    ...             'methods': ['delete', 'patch', 'put', 'get'],
    ...             'path': '/v1/instances/{instance_name}/classes/{name}/',
    ...         },
    ...         'list': {
    ...             'methods': ['post', 'get'],
    ...             'path': '/v1/instances/{instance_name}/classes/',
    ...         },
    ...     })

    """

    def __init__(self, name, plural_name=None, endpoints=None):
        self.name = name
        self.plural_name = plural_name or name + 's'
        self.endpoints = {}
        for key, endpoint in (endpoints or {}).items():
            if not isinstance(endpoint, Endpoint):
                endpoint = Endpoint(endpoint['methods'], endpoint['path'])
            self.endpoints[key] = endpoint

    def __repr__(self):
        return '<Meta %s>' % (self.name,)

    def get_endpoint(self, endpoint_name):
        try:
            return self.endpoints[endpoint_name]
        except KeyError:
            raise EndpointNotFound('Invalid endpoint name: %s' % (endpoint_name,))

    def has_path_properties(self, endpoint_name, source):
        """Returns whether every placeholder of the named endpoint can be
        filled in from `source`."""
        endpoint = self.get_endpoint(endpoint_name)
        return all(read_property(source, prop) is not None
            for prop in endpoint.properties)

    def split_properties(self, endpoint_name, properties):
        """Splits a mapping of filters into the ones that are placeholders of
        the named endpoint's path and the rest, as a pair of dictionaries."""
        endpoint = self.get_endpoint(endpoint_name)
        path_properties, query = {}, {}
        for key, value in (properties or {}).items():
            if key in endpoint.properties:
                path_properties[key] = value
            else:
                query[key] = value
        return path_properties, query

    def resolve_endpoint_path(self, endpoint_name, source):
        """Returns the path of the named endpoint with its placeholders filled
        in from `source`.

        `source` may be a model instance, a mapping, or `None`. If any of the
        endpoint's placeholders has no value, raises `MissingParameterError`.

        """
        endpoint = self.get_endpoint(endpoint_name)
        values = {}
        missing = []
        for prop in endpoint.properties:
            value = read_property(source, prop)
            if value is None:
                missing.append(prop)
            else:
                values[prop] = quote(str(value), safe='')
        if missing:
            raise MissingParameterError('Missing "%s" path properties "%s"'
                % (endpoint_name, ','.join(missing)))
        return endpoint.path.format(**values)

    def find_allowed_method(self, endpoint_name, *methods):
        """Returns the first of `methods` the named endpoint allows, lower
        cased.

        If the endpoint allows none of them, raises `UnsupportedMethodError`.

        """
        endpoint = self.get_endpoint(endpoint_name)
        for method in methods:
            if method.lower() in endpoint.methods:
                return method.lower()
        raise UnsupportedMethodError('Unsupported request methods: %s'
            % (','.join(methods),))
