# -*- coding: utf-8 -*-

import io
import unittest

from mock import patch

import s3sign
from s3sign import exceptions
from s3sign.policy import decode_policy

from unittests.common import *


def make_s3(endpoint=None, security_token=''):
    return s3sign.S3(make_auth(security_token), s3sign.Session(), endpoint=endpoint)


class TestS3(S3TestCase):
    @patch('s3sign.Session.do_request')
    def test_file_download(self, do_request):
        req_info = mock_response(do_request, r4status(200, b'hello world'))

        resp = make_s3().file_download('my bucket', 'my file.txt')

        self.assertEqual(b'hello world', resp.read())
        self.assertEqual('GET', req_info.req.method)
        self.assertEqual('https://s3.us-east-1.amazonaws.com/my%20bucket/my%20file.txt', req_info.req.url)
        self.assertEqual('/my%20bucket/my%20file.txt', req_info.req.canonical_uri)
        self.assertEqual('20130524T000000Z', req_info.req.headers['Date'])
        self.assertTrue(req_info.req.headers['Authorization'].startswith(
            'AWS4-HMAC-SHA256 Credential=' + ACCESS_KEY_ID + '/20130524/us-east-1/s3/aws4_request, '))
        self.assertEqual(s3sign.defaults.connect_timeout, req_info.timeout)

    @patch('s3sign.Session.do_request')
    def test_file_download_not_found(self, do_request):
        mock_response(do_request, r4error(404, 'NoSuchKey', 'The specified key does not exist.'))

        try:
            make_s3().file_download(BUCKET_NAME, 'missing.txt')
        except exceptions.NoSuchKey as e:
            self.assertEqual(404, e.status)
            self.assertEqual('NoSuchKey', e.code)
            self.assertEqual('The specified key does not exist.', e.message)
            self.assertEqual(REQUEST_ID, e.request_id)
        else:
            self.fail('NoSuchKey should be raised')

    @patch('s3sign.Session.do_request')
    def test_signature_mismatch(self, do_request):
        mock_response(do_request, r4error(403, 'SignatureDoesNotMatch'))
        self.assertRaises(exceptions.SignatureDoesNotMatch, make_s3().file_download, BUCKET_NAME, 'a.txt')

    @patch('s3sign.Session.do_request')
    def test_unknown_error(self, do_request):
        mock_response(do_request, r4status(500, b'Internal Error'))
        self.assertRaises(exceptions.ServerError, make_s3().file_download, BUCKET_NAME, 'a.txt')

    @patch('s3sign.Session.do_request')
    def test_file_delete(self, do_request):
        req_info = mock_response(do_request, r4status(204))

        result = make_s3().file_delete(BUCKET_NAME, 'a.txt')

        self.assertEqual(204, result.status)
        self.assertEqual(REQUEST_ID, result.request_id)
        self.assertEqual('DELETE', req_info.req.method)
        self.assertTrue('Authorization' in req_info.req.headers)

    @patch('s3sign.Session.do_request')
    def test_file_delete_requires_204(self, do_request):
        mock_response(do_request, r4status(200))
        self.assertRaises(exceptions.ServerError, make_s3().file_delete, BUCKET_NAME, 'a.txt')

    @patch('s3sign.Session.do_request')
    def test_signing_failure_is_not_dispatched(self, do_request):
        mock_response(do_request, r4status(200))

        self.assertRaises(exceptions.DateParseError, make_s3().file_download, BUCKET_NAME, 'a.txt',
                          headers={'Date': 'not-a-date'})
        self.assertEqual(0, do_request.call_count)

    @patch('s3sign.Session.do_request')
    def test_file_upload(self, do_request):
        req_info = mock_response(do_request, r4upload(BUCKET_NAME, 'uploads/hello.txt'))

        fileobj = io.BytesIO(b'xxhello')
        fileobj.seek(2)
        result = make_s3().file_upload(BUCKET_NAME, 'uploads/hello.txt', fileobj, 'hello.txt', 'text/plain',
                                       acl='private')

        self.assertEqual('https://examplebucket.s3.amazonaws.com/uploads/hello.txt', result.location)
        self.assertEqual(BUCKET_NAME, result.bucket)
        self.assertEqual('uploads/hello.txt', result.key)
        self.assertEqual(ETAG, result.etag)
        self.assertEqual(201, result.status)

        req = req_info.req
        self.assertEqual('POST', req.method)
        self.assertEqual('https://s3.us-east-1.amazonaws.com/' + BUCKET_NAME, req.url)
        self.assertTrue('Authorization' not in req.headers)
        self.assertEqual(('hello.txt', fileobj), req.files['file'])

        form = req.data
        self.assertEqual('201', form['success_action_status'])
        self.assertEqual('private', form['acl'])
        self.assertEqual('text/plain', form['Content-Type'])

        conditions = decode_policy(form['policy'])['conditions']
        self.assertTrue(['content-length-range', 0, 5] in conditions)
        self.assertTrue({'success_action_status': '201'} in conditions)

    @patch('s3sign.Session.do_request')
    def test_file_upload_failure(self, do_request):
        mock_response(do_request, r4error(403, 'AccessDenied', 'Invalid according to Policy'))

        self.assertRaises(exceptions.AccessDenied, make_s3().file_upload,
                          BUCKET_NAME, 'a.txt', io.BytesIO(b'a'), 'a.txt', 'text/plain')

    @patch('s3sign.Session.do_request')
    def test_custom_endpoint(self, do_request):
        req_info = mock_response(do_request, r4status(200, b''))

        make_s3(endpoint='localhost:9000/').file_download(BUCKET_NAME, 'a.txt')
        self.assertEqual('https://localhost:9000/examplebucket/a.txt', req_info.req.url)

        make_s3(endpoint='http://minio.local').file_download(BUCKET_NAME, 'a.txt')
        self.assertEqual('http://minio.local/examplebucket/a.txt', req_info.req.url)
        self.assertEqual('minio.local', req_info.req.host)

    def test_create_upload_policies(self):
        policies = make_s3(endpoint='https://minio.local').create_upload_policies(
            s3sign.UploadConfig(BUCKET_NAME, 'a b.txt', 'text/plain', 10))

        self.assertEqual('https://minio.local/examplebucket', policies.url)
        self.assertEqual('a b.txt', policies.form['key'])

    def test_sign_url(self):
        url = make_s3(endpoint='https://s3.amazonaws.com').sign_url('GET', BUCKET_NAME, 'test.txt', 86400,
                                                                   params={'versionId': 'v1'})

        self.assertTrue(url.startswith('https://s3.amazonaws.com/examplebucket/test.txt?'))
        self.assertTrue('&versionId=v1' in url)
        self.assertTrue('X-Amz-Expires=86400' in url)
        self.assertTrue('X-Amz-SignedHeaders=host' in url)

    def test_session_is_required(self):
        self.assertRaises(exceptions.ClientError, s3sign.S3, make_auth(), None)


class TestSession(unittest.TestCase):
    def test_request_exception_is_wrapped(self):
        import requests

        session = s3sign.Session()
        with patch.object(session.session, 'request', side_effect=requests.ConnectionError('refused')):
            self.assertRaises(exceptions.RequestError, session.do_request,
                              s3sign.Request('GET', 'https://localhost', 'a'), 10)

    def test_user_agent(self):
        req = s3sign.Request('GET', 'https://localhost', 'a', app_name='demo')
        self.assertTrue(req.headers['User-Agent'].startswith('s3sign-python/'))
        self.assertTrue(req.headers['User-Agent'].endswith('/demo'))


if __name__ == '__main__':
    unittest.main()
