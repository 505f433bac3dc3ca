# -*- coding: utf-8 -*-

"""
s3sign.utils
------------

工具函数模块。
"""

from email.utils import formatdate

import base64
import binascii
import calendar
import datetime
import hashlib
import logging
import os
import re
import threading
import time

from .exceptions import ClientError, EncodingError

logger = logging.getLogger(__name__)


def to_bytes(data):
    """Covert to UTF-8 encoding if the input is unicode; otherwise return the original data."""
    if isinstance(data, str):
        return data.encode(encoding='utf-8')
    else:
        return data


def to_string(data):
    """Convert the input to unicode if it's utf-8 bytes."""
    if isinstance(data, bytes):
        return data.decode('utf-8')
    else:
        return data


def b64encode_as_string(data):
    return to_string(base64.b64encode(to_bytes(data)))


def b64decode_from_string(data):
    try:
        return base64.b64decode(to_string(data))
    except (TypeError, binascii.Error):
        raise ClientError('Base64 Error: ' + to_string(data))


def sha256_hex(data):
    """返回 `data` 的SHA256值，以十六进制可读字符串（64个小写字符）的方式。"""
    return hashlib.sha256(to_bytes(data)).hexdigest()


#: SHA256 of the empty string
EMPTY_SHA256 = sha256_hex(b'')


# if the object name only holds these characters, no need to encode it
_UNRESERVED_PATH_RE = re.compile(r'[a-zA-Z0-9\-_.~/]+')

_UNRESERVED_CHARS = frozenset('ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_.~')


def _uri_encode(raw_text, keep_slash):
    res = []
    for c in raw_text:
        if c in _UNRESERVED_CHARS or (keep_slash and c == '/'):
            res.append(c)
            continue

        try:
            encoded = c.encode('utf-8')
        except UnicodeEncodeError:
            raise EncodingError('{0!r} can not be encoded as UTF-8'.format(raw_text))

        res.extend('%{0:02X}'.format(b) for b in encoded)

    return ''.join(res)


def encode_path(path):
    """把路径编码为签名所需的规范形式。

    字母、数字以及 ``-_.~/`` 保持不变，其余字符按UTF-8编码后逐字节转义为 ``%XX`` （大写十六进制）。
    已经只包含上述字符的路径原样返回。

    :param str path: 未经编码的路径，如 ``my bucket/my file.txt``

    :raises: 如果路径中含有无法用UTF-8表示的字符，抛出 :class:`EncodingError <s3sign.exceptions.EncodingError>`
    """
    path = to_string(path)
    if _UNRESERVED_PATH_RE.fullmatch(path):
        return path

    return _uri_encode(path, True)


def encode_query_component(text):
    """和 :func:`encode_path` 一样，但 ``/`` 也会被转义。用于查询参数的键和值。"""
    return _uri_encode(to_string(text), False)


def file_object_remaining_bytes(fileobj):
    current = fileobj.tell()

    fileobj.seek(0, os.SEEK_END)
    end = fileobj.tell()
    fileobj.seek(current, os.SEEK_SET)

    return end - current


_STRPTIME_LOCK = threading.Lock()

_ISO8601_FORMAT = "%Y-%m-%dT%H:%M:%S.000Z"
_ISO8601_BASIC_FORMAT = "%Y%m%dT%H%M%SZ"
_SHORT_DATE_FORMAT = "%Y%m%d"

_MONTH_MAPPING = {
    'Jan': 1,
    'Feb': 2,
    'Mar': 3,
    'Apr': 4,
    'May': 5,
    'Jun': 6,
    'Jul': 7,
    'Aug': 8,
    'Sep': 9,
    'Oct': 10,
    'Nov': 11,
    'Dec': 12
}

# A regex to match HTTP Date header, whose format is 'Sat, 05 Dec 2015 11:10:29 GMT'.
# Its strftime/strptime format is '%a, %d %b %Y %H:%M:%S GMT'
_HTTP_GMT_RE = re.compile(
    r'(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun), (?P<day>0[1-9]|([1-2]\d)|(3[0-1])) (?P<month>Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec) (?P<year>\d{4}) (?P<hour>([0-1]\d)|(2[0-3])):(?P<minute>[0-5]\d):(?P<second>[0-5]\d) GMT$'
)

_ISO8601_BASIC_RE = re.compile(r'\d{8}T\d{6}Z')


def utcnow():
    """返回带时区信息的当前UTC时间。"""
    return datetime.datetime.now(datetime.timezone.utc)


def to_unixtime(time_string, format_string):
    with _STRPTIME_LOCK:
        return int(calendar.timegm(time.strptime(time_string, format_string)))


def http_date(timeval=None):
    """返回符合HTTP标准的GMT时间字符串，用strftime的格式表示就是"%a, %d %b %Y %H:%M:%S GMT"。
    但不能使用strftime，因为strftime的结果是和locale相关的。
    """
    return formatdate(timeval, usegmt=True)


def http_to_datetime(time_string):
    """把HTTP Date格式的字符串转换为UTC的datetime。

    HTTP Date形如 `Sat, 05 Dec 2015 11:10:29 GMT` 。
    """
    m = _HTTP_GMT_RE.match(time_string)

    if not m:
        raise ValueError(time_string + " is not in valid HTTP date format")

    return datetime.datetime(int(m.group('year')),
                             _MONTH_MAPPING[m.group('month')],
                             int(m.group('day')),
                             int(m.group('hour')),
                             int(m.group('minute')),
                             int(m.group('second')),
                             tzinfo=datetime.timezone.utc)


def iso8601_basic_to_datetime(time_string):
    """把形如 `20130524T000000Z` 的时间字符串转换为UTC的datetime。"""
    if not _ISO8601_BASIC_RE.fullmatch(time_string):
        raise ValueError(time_string + " is not in valid ISO8601 basic format")

    return datetime.datetime.fromtimestamp(to_unixtime(time_string, _ISO8601_BASIC_FORMAT), datetime.timezone.utc)


def date_to_iso8601(d):
    return d.strftime(_ISO8601_FORMAT)  # It's OK to use strftime, since _ISO8601_FORMAT is not locale dependent


def date_to_iso8601_basic(d):
    return d.strftime(_ISO8601_BASIC_FORMAT)


def date_to_short_date(d):
    return d.strftime(_SHORT_DATE_FORMAT)
