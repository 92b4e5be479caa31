"""
    Transport Methods

    See COPYING for license information
"""
from collections import namedtuple
import http.client
import json
import logging
import threading
import time
from urllib.parse import urlparse, urlencode, quote, unquote

from selectel_storage import consts
from selectel_storage import errors
from selectel_storage.protocols import get_protocol
from selectel_storage.session import Session

logger = logging.getLogger(__name__)

Credentials = namedtuple('Credentials', ['username', 'password', 'account_id',
                                         'project_id', 'project_name'])

CHUNK_SIZE = 64 * 1024


def extract_account_id(username):
    """ Account id is the part of the user name before the first '_' """
    return username.split('_', 1)[0]


class Response(object):
    def __init__(self):
        self.status_code = 0
        self.version = 0
        self.reason = None
        self.headers = {}
        self.content = None

    @property
    def text(self):
        content = self.content or b''
        if isinstance(content, bytes):
            return content.decode('utf-8')
        return content

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if self.status_code == 404:
            raise errors.NotFound(self.status_code, "Not Found", response=self)
        if (self.status_code >= 300) and (self.status_code < 400):
            raise errors.ResponseError(self.status_code, '%s Redirection' % self.status_code, response=self)
        elif (self.status_code >= 400) and (self.status_code < 500):
            raise errors.ResponseError(self.status_code, '%s Client Error' % self.status_code, response=self)
        elif (self.status_code >= 500) and (self.status_code < 600):
            raise errors.ResponseError(self.status_code, '%s Server Error' % self.status_code, response=self)

    def __repr__(self):
        return '<Response [%s]>' % (self.status_code, )


class BaseAuthentication(object):
    """
        Base Authentication class. To be inherited if you want to create
        a new transport. _request() should be overwritten.
    """
    def __init__(self, username, password,
                       protocol=None,
                       account_id=None,
                       project_id=None,
                       project_name=None,
                       auth_token=None,
                       auth_url=None,
                       pool=None,
                       clock=None,
                       **kwargs):
        if not username:
            raise errors.ConfigError('User is required')
        if not password:
            raise errors.ConfigError('Password is required')

        self.protocol = get_protocol(protocol)
        self.credentials = Credentials(username, password,
                                       account_id or extract_account_id(username),
                                       project_id, project_name)
        self.pool = pool
        self.use_default_endpoint = not auth_url
        self.api_url = (auth_url or consts.base_uri(pool)).rstrip('/')
        self.auth_url = self.api_url + self.protocol.path
        self.storage_url = consts.storage_url(self.account_id, api_url=self.api_url)
        self.clock = clock or time.time
        self.session = Session()
        if auth_token:
            self.session.set(auth_token)

    @property
    def account_id(self):
        return self.credentials.account_id

    @property
    def auth_token(self):
        return self.session.token

    @property
    def auth_headers(self):
        if self.session.token is None:
            return {}
        return {'X-Auth-Token': self.session.token}

    def is_authenticated(self):
        return self.session.is_valid(self.clock())

    def authenticate(self):
        """ Performs one authentication exchange and stores the new token

        @raises AuthenticationError, ParseError
        @return: (token, expires_at)
        """
        request = self.protocol.auth_request(self.credentials)
        logger.debug("Authenticating %s against %s", self.credentials.username, self.auth_url)
        try:
            response = self._request(request.method, self.auth_url,
                                     headers=request.headers, body=request.body)
        except errors.RequestError as ex:
            raise errors.AuthenticationError('Authentication request failed: %s' % (ex, ), error=ex) from ex

        if response.status_code == 401:
            raise errors.AuthenticationError('Invalid Credentials')
        if response.status_code >= 300:
            raise errors.AuthenticationError('Authentication failed with status %d' % (response.status_code, ))

        token, expires_at = self.protocol.extract(response, self.clock())
        self.session.set(token, expires_at)
        logger.debug("Authenticated with %r, token expires at %s", self.protocol, expires_at)
        return token, expires_at

    def invalidate(self, token=None):
        """ Forgets the current token; the next request authenticates again

        @param token: only forget the session if it still holds this token
        """
        if token is None:
            self.session.clear()
        else:
            self.session.discard(token)

    def _request(self, method, url, headers=None, body=None):
        """ Sends the authentication request and returns a Response """
        raise NotImplementedError


class BaseAuthenticatedConnection(object):
    """
        Connection that authenticates whenever the session has no valid token.
        _send() and _send_stream() should be overwritten.
    """
    def __init__(self, auth, timeout=None, **kwargs):
        self.auth = auth
        self.timeout = timeout
        self._auth_lock = threading.Lock()

    @property
    def token(self):
        return self.auth.auth_token

    @property
    def storage_url(self):
        return self.auth.storage_url

    def get_token(self):
        """ Returns a valid token, authenticating first if needed """
        session = self.auth.session
        token = session.valid_token(self.auth.clock())
        if token is not None:
            return token
        with self._auth_lock:
            # another thread may have authenticated while we waited
            token = session.valid_token(self.auth.clock())
            if token is not None:
                return token
            token, _ = self.auth.authenticate()
        return token

    def get_headers(self, token, headers=None):
        """ Get headers for a request made with the given token """
        _headers = {'User-Agent': consts.USER_AGENT}
        for key, value in (headers or {}).items():
            if value is not None:
                _headers[key] = str(value)
        _headers['X-Auth-Token'] = token
        return _headers

    def make_request(self, method, url=None, headers=None, params=None, data=None,
                     formatter=None, stream=None):
        """ Makes a request

        @param stream: file-like object to pipe as the request body
        @raises AuthenticationError, RequestError, ResponseError
        """
        token = self.get_token()
        headers = self.get_headers(token, headers)
        url = url or self.storage_url

        logger.debug("%s %s", method, url)
        if stream is not None:
            response = self._send_stream(method, url, headers, params, stream)
        else:
            response = self._send(method, url, headers, params, data)

        if response.status_code == 401:
            logger.info("Token rejected by %s, session invalidated", url)
            self.auth.invalidate(token)
        response.raise_for_status()

        if formatter:
            return formatter(response)
        return response

    def _send(self, method, url, headers, params=None, data=None):
        """ Performs a buffered request and returns a Response """
        raise NotImplementedError

    def _send_stream(self, method, url, headers, params, stream):
        """ Pipes stream as the request body and returns a Response """
        raise NotImplementedError


class ChunkedUploadConnection:
    """
        Chunked Connection class.
        send() will send more data.
        finish() will end the request.
    """
    def __init__(self, method, url, headers=None, size=None, timeout=None):
        self.method = method
        headers = dict(headers or {})

        if size is None:
            headers.pop('Content-Length', None)
            headers['Transfer-Encoding'] = 'chunked'
        else:
            headers['Content-Length'] = str(size)
        self.chunked = size is None

        url_parts = urlparse(url)
        if url_parts.scheme == 'https':
            self.req = http.client.HTTPSConnection(url_parts.hostname, url_parts.port, timeout=timeout)
        else:
            self.req = http.client.HTTPConnection(url_parts.hostname, url_parts.port, timeout=timeout)

        path = requote_path(url_parts.path)
        if url_parts.query:
            path = '%s?%s' % (path, url_parts.query)
        try:
            self.req.putrequest(method, path, skip_accept_encoding=True)
            for key, value in headers.items():
                self.req.putheader(key, value)
            self.req.endheaders()
        except (OSError, http.client.HTTPException) as err:
            raise errors.RequestError('Disconnected', error=err) from err

    def send(self, chunk):
        """ Sends a chunk of data. """
        try:
            if self.chunked:
                self.req.send(b"%X\r\n" % len(chunk))
                self.req.send(chunk)
                self.req.send(b"\r\n")
            else:
                self.req.send(chunk)
        except (OSError, http.client.HTTPException) as err:
            self.req.close()
            raise errors.RequestError('Disconnected', error=err) from err

    def finish(self):
        """ Finished the request out and receives a response. """
        try:
            if self.chunked:
                self.req.send(b"0\r\n\r\n")
            res = self.req.getresponse()
            content = res.read()
        except (OSError, http.client.HTTPException) as err:
            raise errors.RequestError('Disconnected', error=err) from err
        finally:
            self.req.close()

        r = Response()
        r.status_code = res.status
        r.version = res.version
        r.reason = res.reason
        r.headers = dict((k.lower(), v) for k, v in res.getheaders())
        r.content = content
        return r

    def close(self):
        """ Drops the connection without waiting for a response. """
        self.req.close()


def build_url(url, params=None):
    """ Appends urlencoded params to url """
    if not params:
        return url
    separator = '&' if urlparse(url).query else '?'
    return '%s%s%s' % (url, separator, urlencode(params))


def stream_size(stream):
    """ Returns the remaining size of a seekable stream, or None """
    try:
        position = stream.tell()
        end = stream.seek(0, 2)
        stream.seek(position)
    except (AttributeError, OSError, ValueError):
        return None
    return end - position


def requote_path(path):
    """Re-quote the given URL path component.

    This function passes the given path through an unquote/quote cycle to
    ensure that it is fully and consistently quoted.
    """
    parts = path.split("/")
    parts = (quote(unquote(part), safe="") for part in parts)
    return "/".join(parts)
