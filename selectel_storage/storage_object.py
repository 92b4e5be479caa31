"""
    StorageObject module

    See COPYING for license information
"""
from selectel_storage.utils import Model, lower_headers, get_meta, get_path


class StorageObjectModel(Model):
    """ An object as described by a JSON listing record or by object headers """
    def __init__(self, container, name, headers=None):
        self.container = container
        self.name = name
        self.headers = lower_headers(headers)

        _properties = {'container': self.container, 'name': self.name}

        _properties['bytes'] = int(self.headers.get('bytes') or
                                   self.headers.get('content-length') or 0)
        _properties['content_type'] = self.headers.get('content_type') or\
                                      self.headers.get('content-type')
        _properties['hash'] = self.headers.get('hash') or\
                              self.headers.get('etag')
        _properties['last_modified'] = self.headers.get('last_modified') or\
                                       self.headers.get('last-modified')
        _properties['path'] = get_path([self.container, self.name])

        self.meta = get_meta(self.headers, 'x-object-meta-')
        _properties['meta'] = self.meta

        self.properties = _properties
