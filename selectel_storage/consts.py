"""
    Commonly used constants

    See COPYING for license information
"""


__version__ = "0.1.0"

USER_AGENT = "selectel-storage-python/%s" % __version__

# Regional pools are served from <pool>.selcdn.ru
API_HOST = 'selcdn.ru'
DEFAULT_POOL = 'api'

DEFAULT_PROTOCOL = 3

AUTH_PATHS = {
    1: '/auth/v1.0',
    2: '/v2.0/tokens',
    3: '/v3/auth/tokens',
}


def base_uri(pool=None):
    return 'https://%s.%s' % (pool or DEFAULT_POOL, API_HOST)


def storage_url(account_id, pool=None, api_url=None):
    """ Returns the Swift storage URL for the account """
    return '%s/v1/SEL_%s' % (api_url or base_uri(pool), account_id)
