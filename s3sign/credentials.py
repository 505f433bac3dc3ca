# -*- coding: utf-8 -*-

import json
import logging
import threading

import requests

from . import defaults
from .exceptions import ClientError, RequestError
from .utils import to_string

logger = logging.getLogger(__name__)


class Credentials(object):
    """一组访问凭证。签名过程中只读取、不修改。

    :param str access_key_id: AccessKeyId
    :param str access_key_secret: SecretAccessKey
    :param str region: 签名所用的区域，如 `us-east-1`
    :param str security_token: 临时凭证的安全令牌，非临时凭证为空
    """
    def __init__(self, access_key_id="", access_key_secret="", region="", security_token=""):
        self.access_key_id = access_key_id
        self.access_key_secret = access_key_secret
        self.region = region
        self.security_token = security_token

    def get_access_key_id(self):
        return self.access_key_id

    def get_access_key_secret(self):
        return self.access_key_secret

    def get_region(self):
        return self.region

    def get_security_token(self):
        return self.security_token


class CredentialsProvider(object):
    def get_credentials(self):
        return


class StaticCredentialsProvider(CredentialsProvider):
    def __init__(self, access_key_id="", access_key_secret="", region="", security_token=""):
        self.credentials = Credentials(access_key_id, access_key_secret, region, security_token)

    def get_credentials(self):
        return self.credentials


class IamCredentialsProvider(CredentialsProvider):
    """通过实例元数据服务获取凭证，只在第一次使用时获取一次。

    :param str region: 签名所用的区域
    :param fetcher: 默认为访问 `defaults.security_credentials_url` 的 :class:`IamCredentialsFetcher`
    :param timeout: 每次HTTP请求的超时时间，默认为 `defaults.metadata_timeout`
    """
    def __init__(self, region, fetcher=None, timeout=None):
        self.region = region
        self.fetcher = fetcher or IamCredentialsFetcher()
        self.timeout = defaults.get(timeout, defaults.metadata_timeout)
        self.credentials = None
        self.__lock = threading.Lock()

    def get_credentials(self):
        if self.credentials is None:
            with self.__lock:
                if self.credentials is None:
                    self.credentials = self.fetcher.fetch(self.region, self.timeout)

        return self.credentials


class IamCredentialsFetcher(object):
    """先获取实例绑定的IAM角色名，再获取该角色的临时凭证。"""
    def __init__(self, base_url=None, session=None):
        self.base_url = base_url or defaults.security_credentials_url
        self.session = session or requests.Session()

    def fetch(self, region, timeout=None):
        timeout = defaults.get(timeout, defaults.metadata_timeout)

        role = to_string(self.__get(self.base_url, timeout)).strip()
        if not role:
            raise ClientError("No IAM role is attached to the instance")

        body = self.__get(self.base_url.rstrip('/') + '/' + role, timeout)
        try:
            dic = json.loads(to_string(body))
        except ValueError as e:
            raise ClientError("Invalid credentials document from instance metadata: {0}".format(e))

        code = dic.get('Code')
        if code != "Success":
            raise ClientError("Get credentials from instance metadata error, code: {0}".format(code))

        logger.debug("Fetched IAM credentials: role: {0}, access_key_id: {1}, expiration: {2}".format(
            role, dic.get('AccessKeyId'), dic.get('Expiration')))

        return Credentials(dic.get('AccessKeyId', ''),
                           dic.get('SecretAccessKey', ''),
                           region,
                           dic.get('Token', ''))

    def __get(self, url, timeout):
        try:
            response = self.session.get(url, timeout=timeout)
        except requests.RequestException as e:
            logger.error("Exception: {0}".format(e))
            raise RequestError(e)

        if response.status_code != 200:
            raise ClientError("Failed to fetch credentials url {0}, http code:{1}, msg:{2}".format(
                url, response.status_code, response.text))

        return response.content
