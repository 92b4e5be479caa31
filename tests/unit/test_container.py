import json
import unittest

from selectel_storage import errors
from selectel_storage.container import ContainerModel, parse_listing
from selectel_storage.storage_object import StorageObjectModel


class ParseListingTest(unittest.TestCase):
    def test_plain(self):
        self.assertEqual(parse_listing('a.png\nb.png\n'), ['a.png', 'b.png'])

    def test_plain_without_trailing_newline(self):
        self.assertEqual(parse_listing('a.png\nb.png', 'plain'), ['a.png', 'b.png'])

    def test_plain_empty(self):
        self.assertEqual(parse_listing(''), [])

    def test_json(self):
        body = json.dumps([{'name': 'a.png', 'bytes': 10, 'hash': 'abc',
                            'content_type': 'image/png',
                            'last_modified': '2020-01-01T00:00:00'}])
        files = parse_listing(body, 'json', container='photos')
        self.assertEqual(len(files), 1)
        self.assertIsInstance(files[0], StorageObjectModel)
        self.assertEqual(dict((key, files[0][key]) for key in
                              ('name', 'bytes', 'hash', 'content_type', 'last_modified')),
                         {'name': 'a.png', 'bytes': 10, 'hash': 'abc',
                          'content_type': 'image/png', 'last_modified': '2020-01-01T00:00:00'})
        self.assertEqual(files[0]['container'], 'photos')
        self.assertEqual(files[0]['path'], 'photos/a.png')

    def test_json_subdir(self):
        files = parse_listing('[{"subdir": "2020/"}]', 'json', container='photos')
        self.assertEqual(files[0]['name'], '2020')
        self.assertEqual(files[0]['content_type'], 'application/directory')

    def test_json_empty(self):
        self.assertEqual(parse_listing('', 'json'), [])

    def test_xml(self):
        self.assertRaises(errors.NotSupported, parse_listing, '<container/>', 'xml')
        self.assertRaises(errors.NotSupported, parse_listing, 'a.png\n', 'xml')
        self.assertRaises(errors.NotSupported, parse_listing, '', 'xml')

    def test_unknown_format(self):
        self.assertRaises(errors.NotSupported, parse_listing, 'a', 'yaml')


class ContainerModelTest(unittest.TestCase):
    def test_headers(self):
        model = ContainerModel('photos', {'X-Container-Object-Count': '3',
                                          'X-Container-Bytes-Used': '1024',
                                          'X-Container-Meta-Type': 'private',
                                          'X-Container-Meta-Owner': 'me'})
        self.assertEqual(model['name'], 'photos')
        self.assertEqual(model['count'], 3)
        self.assertEqual(model['size'], 1024)
        self.assertEqual(model['type'], 'private')
        self.assertEqual(model.meta, {'type': 'private', 'owner': 'me'})
        self.assertNotIn('files', model)

    def test_listing_record(self):
        model = ContainerModel('photos', {'name': 'photos', 'count': 2, 'bytes': 20})
        self.assertEqual(model['count'], 2)
        self.assertEqual(model['size'], 20)

    def test_files(self):
        model = ContainerModel('photos', {}, files=['a.png'])
        self.assertEqual(model['files'], ['a.png'])
        self.assertEqual(model['count'], 0)
