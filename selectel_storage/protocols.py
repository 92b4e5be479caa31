"""
    Authentication protocols.

    Describes the request shape of each supported authentication handshake
    and how a token and its expiry are read back from the response. Nothing
    in this module performs I/O.

    See COPYING for license information
"""
from collections import namedtuple
from datetime import datetime, timezone
import json

from selectel_storage import consts
from selectel_storage import errors

AuthRequest = namedtuple('AuthRequest', ['method', 'headers', 'body'])


def parse_timestamp(value):
    """ Converts an ISO-8601 timestamp into epoch seconds. Naive values are UTC. """
    if not isinstance(value, str):
        raise errors.ParseError("Invalid token expiry: %r" % (value, ))
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    try:
        stamp = datetime.fromisoformat(value)
    except ValueError:
        raise errors.ParseError("Invalid token expiry: %r" % (value, ))
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp.timestamp()


def _header(response, name):
    value = response.headers.get(name)
    if not value:
        raise errors.ParseError("Missing %s header in authentication response" % (name, ))
    return value


def _json_field(response, *path):
    try:
        data = response.json()
    except ValueError:
        raise errors.ParseError("Could not parse authentication JSON.")
    for key in path:
        if not isinstance(data, dict) or key not in data:
            raise errors.ParseError("Missing %s in authentication response" % ('.'.join(path), ))
        data = data[key]
    return data


class AuthProtocol(object):
    """
        Base authentication protocol. auth_request() and extract() should
        be overwritten.
    """
    version = None
    method = None

    @property
    def path(self):
        return consts.AUTH_PATHS[self.version]

    def auth_request(self, credentials):
        """ Returns the AuthRequest to send for the given credentials """
        raise NotImplementedError

    def extract(self, response, now):
        """ Returns (token, expires_at) read from the authentication response

        @param response: `selectel_storage.transport.Response`
        @param now: current time in epoch seconds
        @raises ParseError
        """
        raise NotImplementedError

    def __repr__(self):
        return '%s(v%s)' % (self.__class__.__name__, self.version)


class KeyAuthProtocol(AuthProtocol):
    """ Legacy key authentication (v1.0) """
    version = 1
    method = 'GET'

    def auth_request(self, credentials):
        headers = {'X-Auth-User': credentials.username,
                   'X-Auth-Key': credentials.password}
        return AuthRequest(self.method, headers, None)

    def extract(self, response, now):
        token = _header(response, 'x-auth-token')
        lifetime = _header(response, 'x-expire-auth-token')
        try:
            lifetime = int(lifetime)
        except ValueError:
            raise errors.ParseError("Invalid x-expire-auth-token header: %r" % (lifetime, ))
        return token, now + lifetime


class TenantAuthProtocol(AuthProtocol):
    """ Keystone v2 tenant authentication """
    version = 2
    method = 'POST'

    def auth_request(self, credentials):
        auth = {'passwordCredentials': {'username': credentials.username,
                                        'password': credentials.password}}
        if credentials.project_id:
            auth['tenantId'] = credentials.project_id
        elif credentials.project_name:
            auth['tenantName'] = credentials.project_name
        headers = {'Content-Type': 'application/json'}
        return AuthRequest(self.method, headers, json.dumps({'auth': auth}))

    def extract(self, response, now):
        token = _json_field(response, 'access', 'token', 'id')
        expires = _json_field(response, 'access', 'token', 'expires')
        return token, parse_timestamp(expires)


class IdentityAuthProtocol(AuthProtocol):
    """ Keystone v3 identity authentication """
    version = 3
    method = 'POST'

    def auth_request(self, credentials):
        auth = {
            'identity': {
                'methods': ['password'],
                'password': {
                    'user': {'id': credentials.username,
                             'password': credentials.password},
                },
            },
        }
        if credentials.project_id:
            auth['scope'] = {'project': {'id': credentials.project_id}}
        elif credentials.project_name:
            auth['scope'] = {'project': {'name': credentials.project_name,
                                         'domain': {'name': credentials.account_id}}}
        headers = {'Content-Type': 'application/json'}
        return AuthRequest(self.method, headers, json.dumps({'auth': auth}))

    def extract(self, response, now):
        token = _header(response, 'x-subject-token')
        expires = _json_field(response, 'token', 'expires_at')
        return token, parse_timestamp(expires)


PROTOCOLS = {
    1: KeyAuthProtocol(),
    2: TenantAuthProtocol(),
    3: IdentityAuthProtocol(),
}


def get_protocol(proto=None):
    """ Returns the AuthProtocol for 1, 2 or 3 ('v1', '2', ... are accepted too)

    @raises ConfigError
    """
    if isinstance(proto, AuthProtocol):
        return proto
    if proto is None:
        proto = consts.DEFAULT_PROTOCOL
    key = proto
    if isinstance(key, str):
        key = key.lower().lstrip('v')
        try:
            key = int(key)
        except ValueError:
            pass
    if isinstance(key, bool) or key not in PROTOCOLS:
        raise errors.ConfigError("Unknown authentication protocol: %r" % (proto, ))
    return PROTOCOLS[key]
