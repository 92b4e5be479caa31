"""
    Misc Utils

    See COPYING for license information
"""
from collections.abc import MutableMapping
import io
from urllib.parse import quote

from selectel_storage import errors


class Model(MutableMapping):
    def __getitem__(self, key):
        return self.properties[key]

    def __setitem__(self, key, item):
        self.properties[key] = item

    def __delitem__(self, key):
        del self.properties[key]

    def __iter__(self):
        return iter(self.properties)

    def __len__(self):
        return len(self.properties)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.properties)


def lower_headers(headers):
    """ Returns a copy of headers with lowercased keys """
    return dict((key.lower(), value) for key, value in (headers or {}).items())


def get_meta(headers, prefix):
    """ Collects `<prefix><name>` headers into {name: value} """
    meta = {}
    for key, value in headers.items():
        if key.startswith(prefix):
            meta[key[len(prefix):]] = value
    return meta


def unicode_quote(s):
    return quote(str(s))


def get_path(parts=None):
    """
        Returns the path to a resource. Parts can be a list of strings or
        a string.
    """
    path = parts
    if parts:
        if isinstance(parts, (list, tuple)):
            path = '/'.join(map(unicode_quote, parts))
        else:
            path = '/'.join(map(unicode_quote, path.split('/')))
    return path


def open_upload_source(source):
    """ Turns an upload source into a readable binary stream.

    A string is a local path and is opened; bytes are wrapped in a BytesIO;
    anything with a read() method is returned unchanged.

    @raises MissingFile, OSError
    """
    if isinstance(source, str):
        return open(source, 'rb')
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    if hasattr(source, 'read'):
        return source
    raise errors.MissingFile('File missed')
