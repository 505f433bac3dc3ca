# -*- coding: utf-8 -*-

"""
文件上传、下载、删除等操作的入口是 :class:`S3 <s3sign.S3>` 。签名由 `auth` 完成，HTTP请求由调用者传入的
`session` 发送，两者互不依赖。

用法 ::

    >>> import s3sign
    >>> auth = s3sign.AuthV4('your-access-key-id', 'your-access-key-secret', 'us-east-1')
    >>> s3 = s3sign.S3(auth, s3sign.Session())
    >>> with open('image.jpg', 'rb') as f:
    ...     result = s3.file_upload('my-bucket', 'images/image.jpg', f, 'image.jpg', 'image/jpeg')

使用兼容S3协议的其他服务时，通过 `endpoint` 参数指定访问域名；不带协议头时默认为https。
"""

import logging

from . import defaults
from . import exceptions
from . import http
from . import models
from . import utils
from . import xml_utils
from .exceptions import ClientError
from .headers import FORM_FILE, FORM_SUCCESS_ACTION_STATUS
from .policy import PostPolicy

logger = logging.getLogger(__name__)


class S3(object):
    """用于文件上传、下载、删除的类。

    :param auth: 包含了用户认证信息的Auth对象，如 :class:`AuthV4 <s3sign.AuthV4>`
    :param session: 发送HTTP请求的 :class:`Session <s3sign.http.Session>` ，必须由调用者提供
    :param str endpoint: 兼容S3协议的服务的访问域名，为None时使用 `defaults.endpoint_format`
    :param connect_timeout: 连接超时时间，单位秒
    :param str app_name: 应用名。该参数不为空，则在User Agent中加入其值。
    """
    def __init__(self, auth, session, endpoint=None, connect_timeout=None, app_name=''):
        if session is None:
            raise ClientError('session should not be None')

        self.auth = auth
        self.session = session
        self.endpoint = _normalize_endpoint(endpoint.strip()) if endpoint else None
        self.timeout = defaults.get(connect_timeout, defaults.connect_timeout)
        self.app_name = app_name
        self.post_policy = PostPolicy(auth.credentials_provider, auth.clock)

    def file_download(self, bucket_name, key, headers=None):
        """下载一个文件。读取完毕后请调用返回值的 `close()` 。

        :return: :class:`Response <s3sign.http.Response>` ，可以调用 `read()` 或迭代读取文件内容
        """
        return self._do('GET', bucket_name, key, 200, headers=headers)

    def file_upload(self, bucket_name, key, fileobj, filename, content_type,
                    content_disposition='', acl='', meta_data=None):
        """通过POST表单上传一个文件，上传的长度为 `fileobj` 当前位置到文件末尾。

        :param fileobj: 支持seek()和tell()的file object
        :param str filename: 表单中 `file` 域的文件名
        :param dict meta_data: 额外的表单域

        :return: :class:`UploadResponse <s3sign.models.UploadResponse>`
        """
        form_meta = {FORM_SUCCESS_ACTION_STATUS: '201'}
        form_meta.update(meta_data or {})

        policies = self.post_policy.create_upload_policies(models.UploadConfig(
            bucket_name, key, content_type, utils.file_object_remaining_bytes(fileobj),
            content_disposition=content_disposition,
            acl=acl,
            meta_data=form_meta), default_url=self._make_url(bucket_name))

        req = http.Request('POST', policies.url,
                           data=policies.form,
                           files={FORM_FILE: (filename, fileobj)},
                           app_name=self.app_name)
        resp = self.__send(req, 201)

        logger.debug("Upload file done, bucket: {0}, key: {1}".format(bucket_name, key))
        return xml_utils.parse_upload_response(models.UploadResponse(resp), resp.read())

    def file_delete(self, bucket_name, key, headers=None):
        """删除一个文件，成功时S3返回204。

        :return: :class:`RequestResult <s3sign.models.RequestResult>`
        """
        resp = self._do('DELETE', bucket_name, key, 204, headers=headers)
        resp.read()
        return models.RequestResult(resp)

    def create_upload_policies(self, config):
        """生成POST上传表单， `config.upload_url` 为空时使用Bucket的URL。

        :type config: s3sign.models.UploadConfig
        :return: :class:`UploadPolicies <s3sign.models.UploadPolicies>`
        """
        return self.post_policy.create_upload_policies(config, default_url=self._make_url(config.bucket_name))

    def sign_url(self, method, bucket_name, key, expires, params=None, headers=None):
        """生成签名URL。

        :param str method: HTTP方法，如'GET'、'PUT'、'DELETE'等
        :param int expires: 过期时间（单位：秒），链接在当前时间再过expires秒后过期

        :return: 签名URL。
        """
        req = http.Request(method, self._get_endpoint(), bucket_name + '/' + key,
                           params=params,
                           headers=headers,
                           app_name=self.app_name)
        return self.auth.sign_url(req, expires)

    def _do(self, method, bucket_name, key, expected_status, **kwargs):
        req = http.Request(method, self._get_endpoint(), bucket_name + '/' + key,
                           app_name=self.app_name,
                           **kwargs)
        self.auth.sign_request(req)

        return self.__send(req, expected_status)

    def _get_endpoint(self):
        if self.endpoint:
            return self.endpoint

        region = self.auth.credentials_provider.get_credentials().get_region()
        return defaults.endpoint_format.format(region)

    def _make_url(self, bucket_name):
        return self._get_endpoint() + '/' + utils.encode_path(bucket_name)

    def __send(self, req, expected_status):
        resp = self.session.do_request(req, timeout=self.timeout)
        if resp.status != expected_status:
            e = exceptions.make_exception(resp)
            logger.error("Exception: {0}".format(e))
            raise e

        return resp


def _normalize_endpoint(endpoint):
    if not endpoint.startswith('http://') and not endpoint.startswith('https://'):
        endpoint = 'https://' + endpoint

    return endpoint.rstrip('/')
