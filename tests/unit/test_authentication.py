import json
import unittest
from mock import Mock

from selectel_storage import errors
from selectel_storage.transport import BaseAuthentication, Response


def make_response(status=200, headers=None, content=b''):
    response = Response()
    response.status_code = status
    response.headers = headers or {}
    response.content = content
    return response


V1_RESPONSE = make_response(204, {'x-auth-token': 'v1-token', 'x-expire-auth-token': '3600'})
V2_RESPONSE = make_response(200, content=json.dumps({
    'access': {'token': {'id': 'v2-token', 'expires': '2030-01-01T00:00:00Z'}}}).encode())
V3_RESPONSE = make_response(201, {'x-subject-token': 'v3-token'}, json.dumps({
    'token': {'expires_at': '2030-01-01T00:00:00.000000Z'}}).encode())


class BaseAuthenticationTest(unittest.TestCase):
    def test_instance_setup(self):
        self.assertEqual(self.auth.account_id, '12345')
        self.assertEqual(self.auth.auth_url, 'https://api.selcdn.ru/v3/auth/tokens')
        self.assertTrue(self.auth.use_default_endpoint)
        self.assertEqual(self.auth.storage_url, 'https://api.selcdn.ru/v1/SEL_12345')
        self.assertIsNone(self.auth.auth_token)
        self.assertEqual(self.auth.auth_headers, {})
        self.assertFalse(self.auth.is_authenticated())

    def test_pool(self):
        auth = BaseAuthentication('12345_user', 'secret', pool='ru-1')
        self.assertEqual(auth.storage_url, 'https://ru-1.selcdn.ru/v1/SEL_12345')

    def test_auth_url(self):
        auth = BaseAuthentication('12345', 'secret', protocol=1, auth_url='http://localhost:8080/')
        self.assertEqual(auth.auth_url, 'http://localhost:8080/auth/v1.0')
        self.assertFalse(auth.use_default_endpoint)
        self.assertEqual(auth.storage_url, 'http://localhost:8080/v1/SEL_12345')

    def test_account_id(self):
        auth = BaseAuthentication('user', 'secret', account_id='777')
        self.assertEqual(auth.account_id, '777')

    def test_missing_credentials(self):
        self.assertRaises(errors.ConfigError, BaseAuthentication, None, 'secret')
        self.assertRaises(errors.ConfigError, BaseAuthentication, '12345', '')

    def test_unknown_protocol(self):
        self.assertRaises(errors.ConfigError, BaseAuthentication, '12345', 'secret', protocol=5)

    def test_auth_token(self):
        auth = BaseAuthentication('12345', 'secret', auth_token='seeded', clock=lambda: 1000.0)
        self.assertEqual(auth.auth_token, 'seeded')
        self.assertIsNone(auth.session.expires_at)
        self.assertTrue(auth.is_authenticated())
        self.assertEqual(auth.auth_headers, {'X-Auth-Token': 'seeded'})

    def test_authenticate_v1(self):
        auth = BaseAuthentication('12345_user', 'secret', protocol=1, clock=lambda: 1000.0)
        auth._request = Mock(return_value=V1_RESPONSE)
        result = auth.authenticate()

        auth._request.assert_called_once_with(
            'GET', 'https://api.selcdn.ru/auth/v1.0',
            headers={'X-Auth-User': '12345_user', 'X-Auth-Key': 'secret'}, body=None)
        self.assertEqual(result, ('v1-token', 4600.0))
        self.assertEqual(auth.session.token, 'v1-token')
        self.assertEqual(auth.session.expires_at, 4600.0)

    def test_authenticate_v2(self):
        auth = BaseAuthentication('12345_user', 'secret', protocol=2, clock=lambda: 1000.0)
        auth._request = Mock(return_value=V2_RESPONSE)
        token, expires_at = auth.authenticate()

        method, url = auth._request.call_args[0]
        self.assertEqual((method, url), ('POST', 'https://api.selcdn.ru/v2.0/tokens'))
        body = json.loads(auth._request.call_args[1]['body'])
        self.assertEqual(body['auth']['passwordCredentials']['username'], '12345_user')
        self.assertEqual(token, 'v2-token')
        self.assertEqual(auth.session.expires_at, expires_at)
        self.assertTrue(auth.is_authenticated())

    def test_authenticate_v3(self):
        self.auth._request = Mock(return_value=V3_RESPONSE)
        token, expires_at = self.auth.authenticate()

        method, url = self.auth._request.call_args[0]
        self.assertEqual((method, url), ('POST', 'https://api.selcdn.ru/v3/auth/tokens'))
        self.assertEqual(token, 'v3-token')
        self.assertEqual(self.auth.auth_headers, {'X-Auth-Token': 'v3-token'})
        self.assertEqual(self.auth.session.expires_at, expires_at)

    def test_invalid_credentials(self):
        self.auth._request = Mock(return_value=make_response(401))
        self.assertRaises(errors.AuthenticationError, self.auth.authenticate)
        self.assertIsNone(self.auth.auth_token)

    def test_server_error(self):
        self.auth._request = Mock(return_value=make_response(500))
        with self.assertRaises(errors.AuthenticationError) as ctx:
            self.auth.authenticate()
        self.assertNotIsInstance(ctx.exception, errors.ParseError)

    def test_transport_error(self):
        error = errors.RequestError('connection refused')
        self.auth._request = Mock(side_effect=error)
        with self.assertRaises(errors.AuthenticationError) as ctx:
            self.auth.authenticate()
        self.assertIs(ctx.exception.error, error)
        self.assertIs(ctx.exception.__cause__, error)

    def test_unexpected_shape(self):
        # a v1 response does not satisfy the v3 contract
        self.auth._request = Mock(return_value=V1_RESPONSE)
        self.assertRaises(errors.ParseError, self.auth.authenticate)
        self.assertIsNone(self.auth.auth_token)

    def test_invalidate(self):
        self.auth._request = Mock(return_value=V3_RESPONSE)
        self.auth.authenticate()
        self.auth.invalidate()
        self.assertIsNone(self.auth.auth_token)
        self.assertFalse(self.auth.is_authenticated())

    def test_invalidate_stale_token(self):
        self.auth.session.set('current')
        self.auth.invalidate('stale')
        self.assertEqual(self.auth.auth_token, 'current')
        self.auth.invalidate('current')
        self.assertIsNone(self.auth.auth_token)

    def setUp(self):
        self.auth = BaseAuthentication('12345_user', 'secret', clock=lambda: 1000.0)
