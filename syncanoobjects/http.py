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

import http.client
import logging
import os
from urllib.parse import urlencode, urlsplit

import httplib2
import simplejson as json


DEFAULT_BASE_URL = 'https://api.syncano.io'

log = logging.getLogger('syncanoobjects.http')


class RequestError(http.client.HTTPException):
    """An HTTPException thrown when the server answers a request with a
    non-success HTTP response.

    The response's status code, reason, and decoded body (or raw content, if
    it could not be decoded) are available as `status`, `reason` and
    `content`.

    """

    def __init__(self, message, status=None, reason=None, content=None):
        super(RequestError, self).__init__(message)
        self.status = status
        self.reason = reason
        self.content = content


class BadRequest(RequestError):
    """An HTTPException thrown when the server reports an error in the
    client's request.

    This exception corresponds to the HTTP status code 400. The API reports
    which fields it refused in the response body, available as `content`.

    """
    pass


class Unauthorized(RequestError):
    """An HTTPException thrown when the server reports that the request
    carried no valid API key.

    This exception corresponds to the HTTP status code 401.

    """
    pass


class Forbidden(RequestError):
    """An HTTPException thrown when the server reports that the API key in
    use is not allowed to make the request.

    This exception corresponds to the HTTP status code 403.

    """
    pass


class NotFoundError(RequestError):
    """An HTTPException thrown when the requested resource does not exist, or
    when a lookup by filters matched no resources."""
    pass


class ServerError(RequestError):
    """An HTTPException thrown when the server reports an unexpected error.

    This exception corresponds to the HTTP status codes 500 and above.

    """
    pass


class BadResponse(RequestError):
    """An HTTPException thrown when the client receives a response it can't
    decode."""
    pass


class BatchError(RequestError):
    """An HTTPException thrown when a batch request, or any request inside
    it, fails.

    For failures inside the batch, `results` holds the per-request results
    the server reported.

    """

    def __init__(self, message, results=None, **kwargs):
        super(BatchError, self).__init__(message, **kwargs)
        self.results = results


error_classes = {
    http.client.BAD_REQUEST:  BadRequest,
    http.client.UNAUTHORIZED: Unauthorized,
    http.client.FORBIDDEN:    Forbidden,
    http.client.NOT_FOUND:    NotFoundError,
}

content_types = ('application/json',)


def decode_content(content):
    if isinstance(content, bytes):
        content = content.decode('utf-8', 'replace')
    return json.loads(content)


def raise_for_response(method, url, response, content):
    """Raises the exception corresponding to an unsuccessful HTTP response.

    Successful (2xx) responses are left alone.

    """
    status = response.status
    if 200 <= status < 300:
        return

    try:
        body = decode_content(content) if content else None
    except ValueError:
        body = content

    if status in error_classes:
        err_cls = error_classes[status]
    elif status >= 500:
        err_cls = ServerError
    else:
        err_cls = RequestError
    raise err_cls('%d %s requesting %s %s' % (status, response.reason, method, url),
        status=status, reason=response.reason, content=body)


class Connection(object):

    """Everything needed to talk to the API: where it is, the API key to
    send, and the user agent to send requests through.

    Parameter `http` is the user agent object to use for requests. It should
    be compatible with `httplib2.Http` instances; if not given, a new
    `httplib2.Http` is made with the given `timeout`.

    Parameter `instance_name` is the default instance for models and
    querysets that live inside an instance.

    Model classes are available as attributes of a connection, bound to it:

    >>> connection = Connection(api_key='a1b2c3', instance_name='my-instance')
    >>> devices = connection.APNSDevice.please().list()

    """

    def __init__(self, api_key=None, base_url=DEFAULT_BASE_URL,
                 instance_name=None, timeout=None, http=None):
        self.api_key = api_key
        self.base_url = base_url
        self.instance_name = instance_name
        self.timeout = timeout
        if http is None:
            http = httplib2.Http(timeout=timeout)
        self.http = http
        self._models = {}

    @classmethod
    def from_env(cls, environ=None, **kwargs):
        """Makes a `Connection` configured from ``SYNCANO_*`` environment
        variables. Keyword arguments override them."""
        if environ is None:
            environ = os.environ
        config = {
            'api_key': environ.get('SYNCANO_API_KEY'),
            'base_url': environ.get('SYNCANO_BASE_URL', DEFAULT_BASE_URL),
            'instance_name': environ.get('SYNCANO_INSTANCE'),
        }
        if environ.get('SYNCANO_TIMEOUT'):
            config['timeout'] = float(environ['SYNCANO_TIMEOUT'])
        config.update(kwargs)
        return cls(**config)

    def __repr__(self):
        return '<Connection %s instance=%r>' % (self.base_url, self.instance_name)

    def __getattr__(self, name):
        """Returns the model class called `name` bound to this connection."""
        if name.startswith('_'):
            raise AttributeError(name)
        from syncanoobjects.dataobject import find_by_name
        from syncanoobjects.model import Model
        try:
            model = find_by_name(name)
        except KeyError:
            raise AttributeError('%s has no model %r' % (type(self).__name__, name))
        if not issubclass(model, Model):
            raise AttributeError('%r is not a model' % (name,))
        return self.bind(model)

    def bind(self, model):
        """Returns a `BoundModel` for `model` using this connection."""
        from syncanoobjects.model import BoundModel
        if model not in self._models:
            self._models[model] = BoundModel(model, connection=self)
        return self._models[model]

    def default_properties(self):
        """The properties models and querysets on this connection start
        with."""
        if self.instance_name is None:
            return {}
        return {'instance_name': self.instance_name}

    def build_url(self, path, query=None):
        """Returns the absolute URL for `path` with `query` parameters added.

        `path` is appended to the base URL, keeping any path the base URL
        has (such as the mount point of a proxy). A `path` that is a full URL
        already is used as it is. Either may carry a query string of its own.

        """
        if urlsplit(path).scheme:
            url = path
        else:
            url = self.base_url.rstrip('/') + '/' + path.lstrip('/')
        if query:
            params = [(k, v) for k, v in sorted(query.items()) if v is not None]
            if params:
                url += ('&' if '?' in url else '?') + urlencode(params, doseq=True)
        return url

    def get_request(self, method, url, data=None):
        """Returns the parameters for a request as a dictionary of keyword
        arguments suitable for passing to `httplib2.Http.request()`."""
        headers = {
            'accept': ', '.join(content_types),
            'content-type': content_types[0],
        }
        if self.api_key is not None:
            headers['X-API-KEY'] = self.api_key

        # Use 'uri' because httplib2.request does.
        request = dict(uri=url, method=method.upper(), headers=headers)
        if data is not None:
            request['body'] = json.dumps(data)
        return request

    def request(self, method, path, query=None, data=None):
        """Sends one request to the API and returns its decoded JSON body.

        Responses without content (such as ``204 No Content``) return
        ``None``. Unsuccessful responses raise the matching `RequestError`.

        """
        url = self.build_url(path, query)
        request = self.get_request(method, url, data)
        log.debug('Requesting %s %s', request['method'], url)
        response, content = self.http.request(**request)
        log.debug('Got %d response to %s %s', response.status, request['method'], url)

        raise_for_response(request['method'], url, response, content)

        if response.status == http.client.NO_CONTENT or not content:
            return None

        content_type = response.get('content-type', '').split(';', 1)[0].strip()
        if content_type not in content_types:
            raise BadResponse(
                'Bad response requesting %s %s: content-type %s is not an expected type'
                % (request['method'], url, response.get('content-type')),
                status=response.status, reason=response.reason, content=content)
        try:
            return decode_content(content)
        except ValueError:
            raise BadResponse('Bad response requesting %s %s: content is not JSON'
                % (request['method'], url),
                status=response.status, reason=response.reason, content=content)
