# -*- coding: utf-8 -*-

"""
s3sign.exceptions
~~~~~~~~~~~~~~~~~

异常类。
"""

import re

import xml.etree.ElementTree as ElementTree
from xml.parsers import expat


_S3_ERROR_TO_EXCEPTION = {} # populated at end of module


S3_CLIENT_ERROR_STATUS = -1
S3_REQUEST_ERROR_STATUS = -2


class S3Error(Exception):
    def __init__(self, status, headers, body, details):
        #: HTTP 状态码
        self.status = status

        #: 请求ID，用于跟踪一个S3请求
        self.request_id = headers.get('x-amz-request-id', '')

        #: HTTP响应体（部分）
        self.body = body

        #: 详细错误信息，是一个string到string的dict
        self.details = details

        #: S3错误码
        self.code = self.details.get('Code', '')

        #: S3错误信息
        self.message = self.details.get('Message', '')

    def __str__(self):
        return str(self.details)


class ClientError(S3Error):
    def __init__(self, message):
        S3Error.__init__(self, S3_CLIENT_ERROR_STATUS, {}, 'ClientError: ' + message, {})

    def __str__(self):
        return self.body


class SigningError(ClientError):
    """签名失败。出现此类异常时，请求不会被修改，也不应该被发送。"""
    pass


class DateParseError(SigningError):
    """请求中已有的Date头部不是合法的HTTP Date。"""
    def __init__(self, date):
        super(DateParseError, self).__init__('invalid Date header: {0!r}'.format(date))
        self.date = date


class EncodingError(SigningError):
    """路径或查询参数无法用UTF-8表示。"""
    pass


class SignatureComputationError(SigningError):
    pass


class RequestError(S3Error):
    def __init__(self, e):
        S3Error.__init__(self, S3_REQUEST_ERROR_STATUS, {}, 'RequestError: ' + str(e), {})
        self.exception = e

    def __str__(self):
        return self.body


class ServerError(S3Error):
    pass


class NotFound(ServerError):
    status = 404
    code = ''


class NoSuchBucket(NotFound):
    status = 404
    code = 'NoSuchBucket'


class NoSuchKey(NotFound):
    status = 404
    code = 'NoSuchKey'


class AccessDenied(ServerError):
    status = 403
    code = 'AccessDenied'


class SignatureDoesNotMatch(ServerError):
    status = 403
    code = 'SignatureDoesNotMatch'


class RequestTimeTooSkewed(ServerError):
    status = 403
    code = 'RequestTimeTooSkewed'


def make_exception(resp):
    status = resp.status
    headers = resp.headers
    body = resp.read(4096)
    details = _parse_error_body(body)
    code = details.get('Code', '')

    try:
        klass = _S3_ERROR_TO_EXCEPTION[(status, code)]
        return klass(status, headers, body, details)
    except KeyError:
        return ServerError(status, headers, body, details)


def _walk_subclasses(klass):
    for sub in klass.__subclasses__():
        yield sub
        for subsub in _walk_subclasses(sub):
            yield subsub


for klass in _walk_subclasses(ServerError):
    status = getattr(klass, 'status', None)
    code = getattr(klass, 'code', None)

    if status is not None and code is not None:
        _S3_ERROR_TO_EXCEPTION[(status, code)] = klass


ElementTreeParseError = (ElementTree.ParseError, expat.ExpatError)


def _parse_error_body(body):
    try:
        root = ElementTree.fromstring(body)
        if root.tag != 'Error':
            return {}

        details = {}
        for child in root:
            details[child.tag] = child.text
        return details
    except ElementTreeParseError:
        return _guess_error_details(body)


def _guess_error_details(body):
    details = {}
    if isinstance(body, bytes):
        body = body.decode('utf-8', 'replace')

    if '<Error>' not in body or '</Error>' not in body:
        return details

    m = re.search('<Code>(.*)</Code>', body)
    if m:
        details['Code'] = m.group(1)

    m = re.search('<Message>(.*)</Message>', body)
    if m:
        details['Message'] = m.group(1)

    return details
