"""
    Connection Module

    See COPYING for license information
"""
import logging

import requests

from selectel_storage import errors
from selectel_storage.transport import BaseAuthentication, BaseAuthenticatedConnection, Response

logger = logging.getLogger(__name__)


def _make_response(res):
    response = Response()
    response.status_code = res.status_code
    response.reason = res.reason
    response.headers = dict((k.lower(), v) for k, v in res.headers.items())
    response.content = res.content
    return response


def _request(method, url, **kwargs):
    try:
        res = requests.request(method, url, **kwargs)
    except requests.RequestException as ex:
        raise errors.RequestError('%s %s failed: %s' % (method, url, ex), error=ex) from ex
    return _make_response(res)


class AuthenticatedConnection(BaseAuthenticatedConnection):
    """
        Connection that will authenticate if it isn't already.
    """
    def __init__(self, auth, verify=True, **kwargs):
        super(AuthenticatedConnection, self).__init__(auth, **kwargs)
        self.verify = verify

    def _send(self, method, url, headers, params=None, data=None):
        return _request(method, url, headers=headers, params=params, data=data,
                        verify=self.verify, timeout=self.timeout)

    def _send_stream(self, method, url, headers, params, stream):
        logger.debug("Streaming upload to %s", url)
        return _request(method, url, headers=headers, params=params, data=stream,
                        verify=self.verify, timeout=self.timeout)


class Authentication(BaseAuthentication):
    """
        Authentication class.
    """
    def __init__(self, username, password, verify=True, timeout=None, *args, **kwargs):
        super(Authentication, self).__init__(username, password, *args, **kwargs)
        self.verify = verify
        self.timeout = timeout

    def _request(self, method, url, headers=None, body=None):
        return _request(method, url, headers=headers, data=body,
                        verify=self.verify, timeout=self.timeout)
