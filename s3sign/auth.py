# -*- coding: utf-8 -*-

import hmac
import hashlib
import logging

from requests.structures import CaseInsensitiveDict

from . import defaults
from . import utils
from .credentials import StaticCredentialsProvider
from .exceptions import ClientError, DateParseError, SignatureComputationError
from .headers import *
from .http import make_canonical_query
from .utils import to_bytes

ALGORITHM = 'AWS4-HMAC-SHA256'
SERVICE_NAME = 's3'
KEY_PREFIX = 'AWS4'
SCOPE_TERMINATOR = 'aws4_request'
UNSIGNED_PAYLOAD = 'UNSIGNED-PAYLOAD'

logger = logging.getLogger(__name__)


def make_auth(access_key_id, access_key_secret, region, security_token=''):
    logger.debug("Init Auth V4: access_key_id: {0}, access_key_secret: ******, region: {1}".format(
        access_key_id, region))
    return AuthV4(access_key_id.strip(), access_key_secret.strip(), region.strip(), security_token)


def credential_scope(timestamp, region):
    """返回形如 `20130524/us-east-1/s3/aws4_request` 的scope。

    :param timestamp: 签名时间
    :type timestamp: datetime.datetime
    :param str region: 区域
    """
    return '/'.join([utils.date_to_short_date(timestamp), region, SERVICE_NAME, SCOPE_TERMINATOR])


def _hmac_sha256(key, msg):
    return hmac.new(key, to_bytes(msg), hashlib.sha256).digest()


def signing_key(access_key_secret, date, region, service=SERVICE_NAME):
    """从SecretAccessKey推导出签名密钥，返回32字节的bytes。

    :param str access_key_secret: SecretAccessKey
    :param str date: 8位日期，如 `20130524`
    :param str region: 区域
    :param str service: 服务名，固定为 `s3`
    """
    try:
        k_date = _hmac_sha256(to_bytes(KEY_PREFIX + access_key_secret), date)
        k_region = _hmac_sha256(k_date, region)
        k_service = _hmac_sha256(k_region, service)
        return _hmac_sha256(k_service, SCOPE_TERMINATOR)
    except (TypeError, ValueError) as e:
        raise SignatureComputationError('failed to derive signing key: {0}'.format(e))


def _canonical_header_value(value):
    return ' '.join(str(value).split())


def _get_canonical_headers(host, headers):
    canon_headers = {}
    for k, v in headers.items():
        if v is None:
            continue
        canon_headers[k.lower()] = _canonical_header_value(v)

    if HOST not in canon_headers:
        canon_headers[HOST] = host

    names = sorted(canon_headers)
    return ';'.join(names), ''.join(k + ':' + canon_headers[k] + '\n' for k in names)


class AuthBase(object):
    """用于保存访问凭证的提供者，以及签名所用的时钟。

    :param credentials_provider: :class:`CredentialsProvider <s3sign.credentials.CredentialsProvider>`
    :param clock: 返回当前UTC时间（datetime）的函数，默认为 :func:`utcnow <s3sign.utils.utcnow>`
    """
    def __init__(self, credentials_provider, clock=None):
        self.credentials_provider = credentials_provider
        self.clock = clock or utils.utcnow

    def _make_signature(self, credentials, timestamp, canonical_request):
        scope = credential_scope(timestamp, credentials.get_region())
        string_to_sign = '\n'.join([ALGORITHM,
                                    utils.date_to_iso8601_basic(timestamp),
                                    scope,
                                    utils.sha256_hex(canonical_request)])

        logger.debug('Make signature: canonical_request = {0}'.format(canonical_request))
        logger.debug('Make signature: string to be signed = {0}'.format(string_to_sign))

        return self._sign(credentials, timestamp, string_to_sign)

    def _sign(self, credentials, timestamp, string_to_sign):
        key = signing_key(credentials.get_access_key_secret(),
                          utils.date_to_short_date(timestamp),
                          credentials.get_region())
        return hmac.new(key, to_bytes(string_to_sign), hashlib.sha256).hexdigest()


class ProviderAuthV4(AuthBase):
    """AWS Signature Version 4，默认构造函数同父类AuthBase，需要传递credentials_provider"""

    def sign_request(self, req):
        """把authorization放入req的header里面

        计算过程中出现任何异常，req都不会被修改。

        :param req: authorization信息将会加入到这个请求的header里面
        :type req: s3sign.http.Request

        :raises: :class:`DateParseError <s3sign.exceptions.DateParseError>` 请求中已有的Date头部无法解析
        """
        credentials = self.credentials_provider.get_credentials()
        timestamp = self.__get_timestamp(req)

        new_headers = {
            DATE: utils.date_to_iso8601_basic(timestamp),
            AMZ_CONTENT_SHA256: utils.EMPTY_SHA256
        }
        if credentials.get_security_token():
            new_headers[AMZ_SECURITY_TOKEN] = credentials.get_security_token()

        headers = CaseInsensitiveDict(req.headers)
        headers.pop(AUTHORIZATION, None)
        headers.update(new_headers)

        signed_headers, canonical_headers = _get_canonical_headers(req.host, headers)
        canonical_request = '\n'.join([req.method.upper(),
                                       req.canonical_uri,
                                       req.canonical_query,
                                       canonical_headers,
                                       signed_headers,
                                       utils.EMPTY_SHA256])
        signature = self._make_signature(credentials, timestamp, canonical_request)

        new_headers[AUTHORIZATION] = '{0} Credential={1}/{2}, SignedHeaders={3}, Signature={4}'.format(
            ALGORITHM, credentials.get_access_key_id(), credential_scope(timestamp, credentials.get_region()),
            signed_headers, signature)

        req.headers.update(new_headers)
        return signature

    def sign_url(self, req, expires):
        """返回一个签过名的URL，签名信息放在查询参数中

        :param req: 需要签名的请求
        :type req: s3sign.http.Request

        :param int expires: 返回的url将在`expires`秒后过期.

        :return: a signed URL
        """
        if not 0 < expires <= defaults.max_presign_expiry:
            raise ClientError('expires should be between 1 and {0} seconds, got {1}'.format(
                defaults.max_presign_expiry, expires))

        credentials = self.credentials_provider.get_credentials()
        timestamp = self.__get_timestamp(req)
        scope = credential_scope(timestamp, credentials.get_region())

        params = dict(req.params)
        params[AMZ_QUERY_ALGORITHM] = ALGORITHM
        params[AMZ_QUERY_CREDENTIAL] = credentials.get_access_key_id() + '/' + scope
        params[AMZ_QUERY_DATE] = utils.date_to_iso8601_basic(timestamp)
        params[AMZ_QUERY_EXPIRES] = str(expires)
        params[AMZ_QUERY_SIGNED_HEADERS] = HOST
        if credentials.get_security_token():
            params[AMZ_QUERY_SECURITY_TOKEN] = credentials.get_security_token()
        params.pop(AMZ_QUERY_SIGNATURE, None)

        canonical_request = '\n'.join([req.method.upper(),
                                       req.canonical_uri,
                                       make_canonical_query(params),
                                       HOST + ':' + req.host + '\n',
                                       HOST,
                                       UNSIGNED_PAYLOAD])

        params[AMZ_QUERY_SIGNATURE] = self._make_signature(credentials, timestamp, canonical_request)
        req.params = params

        return req.url

    def __get_timestamp(self, req):
        date = req.headers.get(DATE)
        if not date:
            return self.clock()

        try:
            return utils.http_to_datetime(date)
        except ValueError:
            pass

        # already signed by us, the Date header holds the signing timestamp
        try:
            return utils.iso8601_basic_to_datetime(date)
        except ValueError:
            raise DateParseError(date)


class AuthV4(ProviderAuthV4):
    """使用固定的AccessKeyId、SecretAccessKey签名。

    :param str access_key_id: AccessKeyId
    :param str access_key_secret: SecretAccessKey
    :param str region: 区域，如 `us-east-1`
    :param str security_token: 临时凭证的安全令牌
    :param clock: 见 :class:`AuthBase`
    """
    def __init__(self, access_key_id, access_key_secret, region, security_token='', clock=None):
        credentials_provider = StaticCredentialsProvider(access_key_id, access_key_secret, region, security_token)
        super(AuthV4, self).__init__(credentials_provider, clock)
