# -*- coding: utf-8 -*-

import unittest

from s3sign import exceptions
from s3sign.models import UploadResponse
from s3sign.xml_utils import parse_upload_response

from unittests.common import *


class TestXmlUtils(unittest.TestCase):
    def test_parse_upload_response(self):
        resp = r4upload(BUCKET_NAME, 'a.txt')
        result = parse_upload_response(UploadResponse(resp), resp.read())

        self.assertEqual('https://examplebucket.s3.amazonaws.com/a.txt', result.location)
        self.assertEqual(BUCKET_NAME, result.bucket)
        self.assertEqual('a.txt', result.key)
        self.assertEqual(ETAG, result.etag)
        self.assertEqual(REQUEST_ID, result.request_id)

    def test_missing_tags(self):
        resp = r4status(201, b'<PostResponse><Key>a.txt</Key></PostResponse>')
        result = parse_upload_response(UploadResponse(resp), resp.read())

        self.assertEqual('a.txt', result.key)
        self.assertEqual('', result.location)

    def test_invalid_body(self):
        resp = r4status(201, b'not xml')
        self.assertRaises(exceptions.ClientError, parse_upload_response, UploadResponse(resp), resp.read())


class TestMakeException(unittest.TestCase):
    def test_known_code(self):
        e = exceptions.make_exception(r4error(403, 'RequestTimeTooSkewed', 'too skewed'))

        self.assertTrue(isinstance(e, exceptions.RequestTimeTooSkewed))
        self.assertEqual('too skewed', e.message)

    def test_not_found_without_code(self):
        e = exceptions.make_exception(r4status(404, b''))
        self.assertTrue(isinstance(e, exceptions.NotFound))

    def test_guess_from_broken_xml(self):
        e = exceptions.make_exception(r4status(403, b'<Error><Code>AccessDenied</Code><Message>no</Message></Error><'))

        self.assertTrue(isinstance(e, exceptions.AccessDenied))
        self.assertEqual('no', e.message)

    def test_signing_errors_are_client_errors(self):
        for klass in [exceptions.DateParseError, exceptions.EncodingError, exceptions.SignatureComputationError]:
            self.assertTrue(issubclass(klass, exceptions.SigningError))
            self.assertTrue(issubclass(klass, exceptions.ClientError))

        self.assertEqual(-1, exceptions.DateParseError('not-a-date').status)


if __name__ == '__main__':
    unittest.main()
