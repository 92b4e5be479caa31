"""
    Client module. Contains the primary interface for the client.

    See COPYING for license information.
"""
import logging
import mimetypes
import os

from selectel_storage import consts
from selectel_storage import errors
from selectel_storage.container import ContainerModel, parse_listing, LISTING_FORMATS
from selectel_storage.utils import Model, lower_headers, get_meta, get_path, open_upload_source

logger = logging.getLogger(__name__)


class AccountModel(Model):
    def __init__(self, url, headers=None):
        self.headers = lower_headers(headers)

        _properties = {}

        _properties['container_count'] = int(self.headers.get('x-account-container-count') or 0)
        _properties['object_count'] = int(self.headers.get('x-account-object-count') or 0)
        _properties['size'] = int(self.headers.get('x-account-bytes-used') or 0)
        _properties['url'] = url

        self.meta = get_meta(self.headers, 'x-account-meta-')
        _properties['meta'] = self.meta

        self.properties = _properties


def validate_container(container):
    if not isinstance(container, str) or not container:
        raise errors.MissingContainer('Container name missed')


def validate_files(files):
    if not isinstance(files, (list, tuple)) or not files:
        raise errors.MissingFiles('Files missed')


def validate_file_name(name):
    if not isinstance(name, str) or not name:
        raise errors.MissingFile('File name missed')


class Client(object):
    """
        Client class. Primary interface for the client.
    """
    def __init__(self, connection, storage_url=None):
        """ constructor for Client object

        @param connection: `selectel_storage.transport.BaseAuthenticatedConnection`
            instance.
        @param storage_url: overrides the storage URL of the connection
        """
        self.conn = connection
        self.storage_url = storage_url

    @property
    def account_id(self):
        return self.conn.auth.account_id

    def get_url(self, path=None):
        """ Returns the url of the resource

        @param path: path to append to the end of the URL
        """
        url = self.storage_url or self.conn.storage_url
        if path:
            url = "%s/%s" % (url, get_path(path))
        return url

    def make_request(self, method, path=None, *args, **kwargs):
        """ Make an HTTP request

        @param method: HTTP method (GET, HEAD, POST, PUT, ...)
        @param path: path
        @raises ResponseError
        """
        url = self.get_url(path)
        return self.conn.make_request(method, url, *args, **kwargs)

    #
    # Account operations
    #

    def get_account_info(self):
        """ Account information

        @raises ResponseError
        @return: `AccountModel`
        """
        def _formatter(res):
            return AccountModel(self.get_url(), res.headers)
        return self.make_request('GET', formatter=_formatter)

    def get_info(self):
        """ Summary storage information

        Served from the account host, or from the API endpoint when the
        client was given an auth_url.

        @return: `selectel_storage.transport.Response`
        """
        if self.conn.auth.use_default_endpoint:
            url = consts.base_uri(self.account_id)
        else:
            url = self.conn.auth.api_url
        return self.conn.make_request('GET', url)

    #
    # Container operations
    #

    def get_containers(self, json=True):
        """ Lists containers

        @param json: return ContainerModel instances instead of plain names
        @raises ResponseError
        """
        if not json:
            return self.make_request('GET', formatter=lambda res: parse_listing(res.text))

        def _formatter(res):
            containers = []
            if res.content:
                for item in res.json():
                    containers.append(ContainerModel(item.get('name'), item))
            return containers
        return self.make_request('GET', params={'format': 'json'}, formatter=_formatter)

    def create_container(self, container=None, type='public', metadata=None):
        """ Creates a new container

        @param container: container name
        @param type: 'public' or 'private'
        @param metadata: dict stored as X-Container-Meta-* headers
        @raises MissingContainer, ResponseError
        """
        validate_container(container)
        headers = {'X-Container-Meta-Type': type or 'public',
                   'Content-Length': '0'}
        for key, value in (metadata or {}).items():
            headers["X-Container-Meta-%s" % (key, )] = value
        return self.make_request('PUT', [container], headers=headers)

    def get_container_info(self, container=None):
        """ Container information

        @raises MissingContainer, ResponseError
        @return: `ContainerModel`
        """
        validate_container(container)

        def _formatter(res):
            return ContainerModel(container, res.headers)
        return self.make_request('HEAD', [container], formatter=_formatter)

    def delete_container(self, container=None):
        """ Deletes an empty container

        @raises MissingContainer, ResponseError
        @raises ContainerNotEmpty if container is not empty
        """
        validate_container(container)
        try:
            return self.make_request('DELETE', [container])
        except errors.ResponseError as ex:
            if ex.status == 409:
                raise errors.ContainerNotEmpty(container) from ex
            raise

    def get_files(self, container=None, limit=None, marker=None, prefix=None,
                  delimiter=None, format=None):
        """ Lists objects in the container.

        @param limit: limit of results to return.
        @param marker: start listing after this object name
        @param prefix: only list objects starting with prefix
        @param delimiter: roll up names after the delimiter into subdirs
        @param format: None for plain names, 'json' for object records
        @raises MissingContainer, NotSupported, ResponseError
        @return: `ContainerModel` with the listing under 'files'
        """
        validate_container(container)
        if format == 'xml':
            raise errors.NotSupported('XML listing format is not supported')
        if format not in LISTING_FORMATS:
            raise errors.NotSupported('Unknown listing format: %r' % (format, ))

        params = {}
        if isinstance(format, str):
            params['format'] = format
        if isinstance(limit, int):
            params['limit'] = limit
        if isinstance(marker, str):
            params['marker'] = marker
        if isinstance(prefix, str):
            params['prefix'] = prefix
        if isinstance(delimiter, str):
            params['delimiter'] = delimiter

        def _formatter(res):
            files = parse_listing(res.text, format, container=container)
            return ContainerModel(container, res.headers, files=files)
        return self.make_request('GET', [container], params=params, formatter=_formatter)

    #
    # Object operations
    #

    def upload_file(self, container=None, file=None, file_name=None, delete_at=None,
                    lifetime=None, etag=None, metadata=None, content_type=None):
        """ Uploads a single file

        @param file: local path, bytes or a readable binary stream
        @param file_name: object name; defaults to the basename of a path
        @param delete_at: epoch time at which the object expires
        @param lifetime: seconds after which the object expires
        @param etag: md5 of the content, checked by the server
        @param metadata: dict stored as X-Object-Meta-* headers
        @raises MissingContainer, MissingFile, ResponseError
        """
        validate_container(container)
        if file is None:
            raise errors.MissingFile('File missed')
        if file_name is None and isinstance(file, str):
            file_name = os.path.basename(file)
        validate_file_name(file_name)

        headers = {'X-Delete-At': delete_at,
                   'X-Delete-After': lifetime,
                   'ETag': etag,
                   'Content-Type': content_type or
                                   mimetypes.guess_type(file_name)[0] or
                                   'application/octet-stream'}
        for key, value in (metadata or {}).items():
            headers["X-Object-Meta-%s" % (key, )] = value

        logger.debug("Uploading %s/%s", container, file_name)
        stream = open_upload_source(file)
        try:
            return self.make_request('PUT', [container, file_name], headers=headers, stream=stream)
        finally:
            if stream is not file:
                stream.close()

    def get_file(self, container=None, file=None):
        """ Reads object content

        @raises MissingContainer, MissingFile, ResponseError
        @return: bytes
        """
        validate_container(container)
        validate_file_name(file)
        return self.make_request('GET', [container, file], formatter=lambda res: res.content)

    def delete_files(self, container=None, files=None):
        """ Deletes several objects of a container in one request

        The response body reports deleted and missing objects as the server
        sent it.

        @raises MissingContainer, MissingFiles, ResponseError
        """
        validate_container(container)
        validate_files(files)
        body = '\n'.join('%s/%s' % (container, name) for name in files).encode('utf-8')
        return self.make_request('POST', headers={'Content-Type': 'text/plain'},
                                 params={'bulk-delete': 'true'}, data=body)

    def delete_file(self, container=None, file=None):
        """ Delete an object

        @raises MissingContainer, MissingFile, ResponseError
        """
        validate_container(container)
        validate_file_name(file)
        return self.make_request('DELETE', [container, file])

    def __repr__(self):
        return 'Client(%s)' % (self.get_url(), )
