"""
    Container module

    See COPYING for license information
"""
import json

from selectel_storage import errors
from selectel_storage.storage_object import StorageObjectModel
from selectel_storage.utils import Model, lower_headers, get_meta, get_path

LISTING_FORMATS = (None, 'plain', 'json', 'xml')


class ContainerModel(Model):
    def __init__(self, name, headers=None, files=None):
        self.name = name
        self.headers = lower_headers(headers)

        _properties = {'name': self.name}

        _properties['count'] = int(self.headers.get('x-container-object-count') or
                                   self.headers.get('count') or 0)
        _properties['size'] = int(self.headers.get('x-container-bytes-used') or
                                  self.headers.get('bytes') or 0)
        _properties['type'] = self.headers.get('x-container-meta-type') or\
                              self.headers.get('type')
        _properties['date'] = self.headers.get('date')
        _properties['path'] = get_path([self.name])

        self.meta = get_meta(self.headers, 'x-container-meta-')
        _properties['meta'] = self.meta
        if files is not None:
            _properties['files'] = files

        self.properties = _properties


def parse_listing(body, format=None, container=None):
    """ Parses an object listing body

    @param body: response body (str)
    @param format: None/'plain' for newline separated names, 'json' for records
    @param container: container name to attach to json records
    @raises NotSupported for 'xml'
    """
    if format == 'json':
        objects = []
        for item in (json.loads(body) if body else []):
            if 'subdir' in item and 'name' not in item:
                item['name'] = item['subdir'].rstrip('/')
                item['content_type'] = 'application/directory'
            objects.append(StorageObjectModel(container, item.get('name'), item))
        return objects
    if format == 'xml':
        raise errors.NotSupported('XML listing format is not supported')
    if format not in LISTING_FORMATS:
        raise errors.NotSupported('Unknown listing format: %r' % (format, ))
    body = body.rstrip('\n')
    if not body:
        return []
    return body.split('\n')
