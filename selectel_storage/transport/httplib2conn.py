"""
    Connection Module

    See COPYING for license information
"""
import http.client
import logging
import threading

import httplib2

from selectel_storage import errors
from selectel_storage.transport import (BaseAuthentication, BaseAuthenticatedConnection,
                                        ChunkedUploadConnection, Response, CHUNK_SIZE,
                                        build_url, stream_size)

logger = logging.getLogger(__name__)


def _request(conn, method, url, headers=None, body=None):
    try:
        res, content = conn.request(url, method, headers=headers, body=body)
    except (httplib2.HttpLib2Error, http.client.HTTPException, OSError) as ex:
        raise errors.RequestError('%s %s failed: %s' % (method, url, ex), error=ex) from ex
    response = Response()
    response.headers = dict(res)
    response.status_code = int(res.status)
    response.reason = res.reason
    response.content = content
    return response


def _read_chunks(stream):
    while True:
        try:
            buff = stream.read(CHUNK_SIZE)
        except OSError as ex:
            raise errors.RequestError('Could not read upload stream: %s' % (ex, ), error=ex) from ex
        if not buff:
            break
        yield buff


class ThreadLocalHttp(threading.local):
    """ One httplib2.Http per thread; Http objects must not be shared. """
    def __init__(self, timeout=None):
        self.http = httplib2.Http(timeout=timeout)


class AuthenticatedConnection(BaseAuthenticatedConnection):
    """
        Connection that will authenticate if it isn't already.
    """
    def __init__(self, auth, debug=False, **kwargs):
        super(AuthenticatedConnection, self).__init__(auth, **kwargs)
        if debug:
            httplib2.debuglevel = 4
        self._local = ThreadLocalHttp(timeout=self.timeout)

    @property
    def http(self):
        return self._local.http

    def _send(self, method, url, headers, params=None, data=None):
        return _request(self.http, method, build_url(url, params), headers=headers, body=data)

    def _send_stream(self, method, url, headers, params, stream):
        size = stream_size(stream)
        logger.debug("Streaming %s bytes to %s", "unknown" if size is None else size, url)
        conn = ChunkedUploadConnection(method, build_url(url, params), headers,
                                       size=size, timeout=self.timeout)
        try:
            for chunk in _read_chunks(stream):
                conn.send(chunk)
        except Exception:
            conn.close()
            raise
        return conn.finish()


class Authentication(BaseAuthentication):
    """
        Authentication class.
    """
    def __init__(self, username, password, timeout=None, *args, **kwargs):
        super(Authentication, self).__init__(username, password, *args, **kwargs)
        self._local = ThreadLocalHttp(timeout=timeout)

    @property
    def http(self):
        return self._local.http

    def _request(self, method, url, headers=None, body=None):
        return _request(self.http, method, url, headers=headers, body=body)
