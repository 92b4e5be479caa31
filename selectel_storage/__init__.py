"""
    Selectel Storage python client.

    See COPYING for license information
"""
import selectel_storage.consts

__version__ = selectel_storage.consts.__version__


def get_client(*args, **kwargs):
    """ Returns an Object Storage client (using Requests)

    @param username: user id; the account id is the part before '_'
    @param password: password for Object Storage
    @param proto: authentication protocol, 1, 2 or 3 (default)
    @param account_id: overrides the account id derived from username
    @param project_id: project to scope v2/v3 tokens to
    @param project_name: project to scope v2/v3 tokens to, by name
    @param auth_token: If provided, used until the server rejects it
    @param pool: selects the regional API endpoint
    @param auth_url: overrides the API endpoint
    @return: `selectel_storage.client.Client`
    """
    return get_requests_client(*args, **kwargs)


def get_requests_client(username, password, proto=None, auth_token=None, timeout=None,
                        verify=True, **kwargs):
    """ Returns an Object Storage client (using Requests) """
    from selectel_storage.client import Client
    from selectel_storage.transport.requestsconn import AuthenticatedConnection, Authentication

    auth = Authentication(username, password, protocol=proto, auth_token=auth_token,
                          timeout=timeout, verify=verify, **kwargs)
    conn = AuthenticatedConnection(auth, timeout=timeout, verify=verify)
    return Client(conn)


def get_httplib2_client(username, password, proto=None, auth_token=None, timeout=None,
                        debug=False, **kwargs):
    """ Returns an Object Storage client (using httplib2) """
    from selectel_storage.client import Client
    from selectel_storage.transport.httplib2conn import AuthenticatedConnection, Authentication

    auth = Authentication(username, password, protocol=proto, auth_token=auth_token,
                          timeout=timeout, **kwargs)
    conn = AuthenticatedConnection(auth, timeout=timeout, debug=debug)
    return Client(conn)

__all__ = ['get_client', 'get_requests_client', 'get_httplib2_client']
