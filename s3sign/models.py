# -*- coding: utf-8 -*-

"""
s3sign.models
~~~~~~~~~~~~~

该模块包含Python SDK API接口所需要的输入参数以及返回值类型。
"""

from .headers import AMZ_REQUEST_ID


class RequestResult(object):
    def __init__(self, resp):
        #: HTTP响应
        self.resp = resp

        #: HTTP状态码
        self.status = resp.status

        #: HTTP头
        self.headers = resp.headers

        #: 请求ID，用于跟踪一个S3请求
        self.request_id = resp.headers.get(AMZ_REQUEST_ID, '')


class UploadConfig(object):
    """生成POST上传表单所需要的参数。

    :param str bucket_name: Bucket名
    :param str object_key: 文件名，不能为空
    :param str content_type: 文件的Content-Type
    :param int file_size: 文件大小的上限，即 `content-length-range` 的右边界
    :param str content_disposition: 可选
    :param str acl: 可选，如 `public-read`
    :param str upload_url: 表单提交的地址，为空时使用Bucket的URL
    :param int expiration: policy的有效期，单位为秒，默认为 `defaults.upload_expiry`
    :param dict meta_data: 额外的表单域，每一项都会生成一个对应的policy条件
    :param bool key_starts_with: 为True时 `object_key` 只作为前缀匹配
    """
    def __init__(self, bucket_name, object_key, content_type, file_size,
                 content_disposition='',
                 acl='',
                 upload_url='',
                 expiration=None,
                 meta_data=None,
                 key_starts_with=False):
        self.bucket_name = bucket_name
        self.object_key = object_key
        self.content_type = content_type
        self.file_size = file_size
        self.content_disposition = content_disposition
        self.acl = acl
        self.upload_url = upload_url
        self.expiration = expiration
        self.meta_data = meta_data or {}
        self.key_starts_with = key_starts_with


class UploadPolicies(object):
    """POST上传所需的地址和表单域。

    :param str url: 表单提交的地址
    :param dict form: 表单域，文件内容需要作为最后一个表单域 `file` 另行添加
    """
    def __init__(self, url, form):
        self.url = url
        self.form = form


class UploadResponse(RequestResult):
    """`success_action_status` 为201时S3返回的XML内容，形如 ::

        <PostResponse>
            <Location>https://my-bucket.s3.amazonaws.com/images%2Fimage.jpg</Location>
            <Bucket>my-bucket</Bucket>
            <Key>images/image.jpg</Key>
            <ETag>"32a8bcc21ae77b1c4bbcdcd7d25dbcf7"</ETag>
        </PostResponse>
    """
    def __init__(self, resp):
        super(UploadResponse, self).__init__(resp)
        self.location = ''
        self.bucket = ''
        self.key = ''
        self.etag = ''
