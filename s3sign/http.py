# -*- coding: utf-8 -*-

"""
s3sign.http
~~~~~~~~~~~

这个模块包含了HTTP Adapters。内部使用requests库进行HTTP通信，但是对使用者是透明的。
该模块中的 `Session` 、 `Request` 、`Response` 对requests的对应的类做了简单的封装。
"""

import platform
from urllib.parse import urlparse

import requests
from requests.structures import CaseInsensitiveDict

from . import __version__
from .exceptions import RequestError
from .utils import encode_path, encode_query_component


_USER_AGENT = 's3sign-python/{0}({1}/{2}/{3};{4})'.format(
    __version__, platform.system(), platform.release(), platform.machine(), platform.python_version())


class Session(object):
    """属于同一个Session的请求共享一组连接池，如有可能也会重用HTTP连接。

    :param session: 已有的 `requests.Session` ，为None时新建一个
    """
    def __init__(self, session=None):
        self.session = session or requests.Session()

    def do_request(self, req, timeout):
        try:
            return Response(self.session.request(req.method, req.url,
                                                 data=req.data,
                                                 files=req.files,
                                                 headers=req.headers,
                                                 stream=True,
                                                 timeout=timeout))
        except requests.RequestException as e:
            raise RequestError(e)


class Request(object):
    """一个待签名、待发送的请求。

    :param str method: HTTP方法
    :param str endpoint: 形如 `https://s3.us-east-1.amazonaws.com` ，不含路径
    :param str path: 未经编码的路径，如 `bucket/key` ，发送和签名时才按 :func:`encode_path <s3sign.utils.encode_path>` 编码
    :param dict params: 查询参数
    :param headers: 请求头
    """
    def __init__(self, method, endpoint, path='',
                 data=None,
                 files=None,
                 params=None,
                 headers=None,
                 app_name=''):
        self.method = method
        self.endpoint = endpoint.rstrip('/')
        self.path = path if not path or path.startswith('/') else '/' + path
        self.data = data
        self.files = files
        self.params = params or {}

        if not isinstance(headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(headers)
        else:
            self.headers = headers

        # tell requests not to add 'Accept-Encoding: gzip, deflate' by default
        if 'Accept-Encoding' not in self.headers:
            self.headers['Accept-Encoding'] = None

        if 'User-Agent' not in self.headers:
            if app_name:
                self.headers['User-Agent'] = _USER_AGENT + '/' + app_name
            else:
                self.headers['User-Agent'] = _USER_AGENT

    @property
    def host(self):
        return urlparse(self.endpoint).netloc

    @property
    def canonical_uri(self):
        return encode_path(self.path) if self.path else '/'

    @property
    def canonical_query(self):
        return make_canonical_query(self.params)

    @property
    def url(self):
        url = self.endpoint + encode_path(self.path) if self.path else self.endpoint
        query = self.canonical_query
        if query:
            return url + '?' + query
        else:
            return url


def make_canonical_query(params):
    encoded_params = []
    for param, value in params.items():
        if value is None:
            value = ''
        encoded_params.append((encode_query_component(param), encode_query_component(str(value))))

    encoded_params.sort()
    return '&'.join(k + '=' + v for k, v in encoded_params)


_CHUNK_SIZE = 8 * 1024


class Response(object):
    def __init__(self, response):
        self.response = response
        self.status = response.status_code
        self.headers = response.headers

    def read(self, amt=None):
        if amt is None:
            content = b''
            for chunk in self.response.iter_content(_CHUNK_SIZE):
                content += chunk
            return content
        else:
            try:
                return next(self.response.iter_content(amt))
            except StopIteration:
                return b''

    def close(self):
        self.response.close()

    def __iter__(self):
        return self.response.iter_content(_CHUNK_SIZE)
