# -*- coding: utf-8 -*-

"""
s3sign.policy
~~~~~~~~~~~~~

生成浏览器直传（POST Object）所需的policy、签名以及表单域。

表单中提交的每一个域都必须在policy里有对应的条件，否则S3会拒绝上传；反之亦然。
例外的是 `bucket` 和 `content-length-range` 只是条件，而 `policy` 和 `x-amz-signature` 只是表单域。
"""

import datetime
import json
import logging

from . import defaults
from . import utils
from .auth import ALGORITHM, AuthBase, credential_scope
from .exceptions import ClientError
from .headers import *
from .models import UploadPolicies

logger = logging.getLogger(__name__)

#: form fields that are not covered by a policy condition
UNCONDITIONED_FIELDS = frozenset([FORM_POLICY, FORM_SIGNATURE])

#: policy conditions that do not appear as form fields
FIELDLESS_CONDITIONS = frozenset([CONDITION_BUCKET, CONDITION_CONTENT_LENGTH_RANGE])

_RESERVED_FIELDS = frozenset(name.lower() for name in [
    FORM_KEY, FORM_ACL, FORM_CONTENT_TYPE, FORM_CONTENT_DISPOSITION, FORM_POLICY, FORM_ALGORITHM,
    FORM_CREDENTIAL, FORM_DATE, FORM_SIGNATURE, FORM_SECURITY_TOKEN, FORM_FILE,
    CONDITION_BUCKET, CONDITION_CONTENT_LENGTH_RANGE])


class PostPolicy(AuthBase):
    """根据 :class:`UploadConfig <s3sign.models.UploadConfig>` 生成签名后的POST表单。

    默认构造函数同父类AuthBase，需要传递credentials_provider。
    """

    def create_upload_policies(self, config, default_url=''):
        """返回 :class:`UploadPolicies <s3sign.models.UploadPolicies>` 。

        :param config: 上传限制条件
        :type config: s3sign.models.UploadConfig

        :param str default_url: `config.upload_url` 为空时使用的表单提交地址
        """
        if not config.object_key:
            raise ClientError('empty object key')

        if config.file_size is None or config.file_size < 0:
            raise ClientError('invalid file size: {0}'.format(config.file_size))

        credentials = self.credentials_provider.get_credentials()
        now = self.clock()
        expiration = now + datetime.timedelta(seconds=defaults.get(config.expiration, defaults.upload_expiry))

        fields = [
            (FORM_ALGORITHM, ALGORITHM),
            (FORM_CREDENTIAL, credentials.get_access_key_id() + '/' + credential_scope(now, credentials.get_region())),
            (FORM_DATE, utils.date_to_iso8601_basic(now)),
        ]
        if config.acl:
            fields.append((FORM_ACL, config.acl))
        if config.content_disposition:
            fields.append((FORM_CONTENT_DISPOSITION, config.content_disposition))
        if credentials.get_security_token():
            fields.append((FORM_SECURITY_TOKEN, credentials.get_security_token()))
        for k, v in config.meta_data.items():
            if k.lower() in _RESERVED_FIELDS:
                raise ClientError('meta data field {0!r} conflicts with a policy field'.format(k))
            fields.append((k, str(v)))

        if config.key_starts_with:
            key_condition = ['starts-with', '$' + FORM_KEY, config.object_key]
        else:
            key_condition = {FORM_KEY: config.object_key}

        conditions = [
            {CONDITION_BUCKET: config.bucket_name},
            key_condition,
            {FORM_CONTENT_TYPE: config.content_type},
            [CONDITION_CONTENT_LENGTH_RANGE, 0, config.file_size],
        ]
        conditions.extend({k: v} for k, v in fields)

        policy = utils.b64encode_as_string(json.dumps({
            'expiration': utils.date_to_iso8601(expiration),
            'conditions': conditions
        }))
        logger.debug('Create upload policies: bucket: {0}, key: {1}, policy: {2}'.format(
            config.bucket_name, config.object_key, policy))

        signature = self._sign(credentials, now, policy)

        form = {
            FORM_KEY: config.object_key,
            FORM_CONTENT_TYPE: config.content_type,
            FORM_POLICY: policy,
            FORM_SIGNATURE: signature
        }
        form.update(fields)

        return UploadPolicies(config.upload_url or default_url, form)


def condition_names(conditions):
    """返回policy中所有条件约束的域名（小写）。"""
    names = set()
    for condition in conditions:
        if isinstance(condition, dict):
            names.update(k.lower() for k in condition)
        elif condition[0] == CONDITION_CONTENT_LENGTH_RANGE:
            names.add(CONDITION_CONTENT_LENGTH_RANGE)
        else:
            names.add(condition[1].lstrip('$').lower())
    return names


def decode_policy(policy):
    """把base64编码的policy还原为dict。"""
    return json.loads(utils.to_string(utils.b64decode_from_string(policy)))
