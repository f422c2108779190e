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

import httplib2

import mock
import simplejson as json

from syncanoobjects import Connection


API_KEY = 'a1b2c3'
BASE_URL = 'https://api.example.com'


def make_response(content=None, status=200, headers=None):
    """Returns the ``(response, content)`` pair an `httplib2.Http` would
    return for a response with the given JSON `content`."""
    info = {'status': status}
    if content is None:
        body = b''
    else:
        info['content-type'] = 'application/json'
        if isinstance(content, (str, bytes)):
            body = content
        else:
            body = json.dumps(content)
    if headers:
        info.update(headers)
    return httplib2.Response(info), body


def mock_http(*responses):
    """Returns a mock `httplib2.Http` answering its requests with
    `responses` in turn.

    Each response is either a ready ``(response, content)`` pair or the JSON
    content of a ``200 OK`` response.

    """
    h = mock.NonCallableMock(spec_set=httplib2.Http)
    h.request.side_effect = [r if isinstance(r, tuple) else make_response(r)
        for r in responses]
    return h


def make_connection(*responses, **kwargs):
    return Connection(api_key=API_KEY, base_url=BASE_URL,
        http=mock_http(*responses), **kwargs)


def expected_request(method, path, body=None):
    """Returns the keyword arguments a `Connection` passes to its user agent
    for a request, with the body decoded."""
    headers = {
        'accept': 'application/json',
        'content-type': 'application/json',
        'X-API-KEY': API_KEY,
    }
    request = dict(uri=BASE_URL + path, method=method, headers=headers)
    if body is not None:
        request['body'] = body
    return request


def requests_made(connection):
    """Returns the keyword arguments of every request sent through
    `connection`'s mock user agent, with JSON bodies decoded."""
    made = []
    for call in connection.http.request.call_args_list:
        kwargs = dict(call[1])
        if 'body' in kwargs:
            kwargs['body'] = json.loads(kwargs['body'])
        made.append(kwargs)
    return made

