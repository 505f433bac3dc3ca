# -*- coding: utf-8 -*-
"""
s3sign.headers
~~~~~~~~~~~~~~
这个模块包含http请求里header的key定义，以及POST表单域的名称
"""
DATE = "Date"
HOST = "host"
AUTHORIZATION = "Authorization"

AMZ_CONTENT_SHA256 = "x-amz-content-sha256"
AMZ_SECURITY_TOKEN = "x-amz-security-token"
AMZ_REQUEST_ID = "x-amz-request-id"

# query parameters of a presigned URL
AMZ_QUERY_ALGORITHM = "X-Amz-Algorithm"
AMZ_QUERY_CREDENTIAL = "X-Amz-Credential"
AMZ_QUERY_DATE = "X-Amz-Date"
AMZ_QUERY_EXPIRES = "X-Amz-Expires"
AMZ_QUERY_SIGNED_HEADERS = "X-Amz-SignedHeaders"
AMZ_QUERY_SECURITY_TOKEN = "X-Amz-Security-Token"
AMZ_QUERY_SIGNATURE = "X-Amz-Signature"

# form fields of a POST upload
FORM_KEY = "key"
FORM_ACL = "acl"
FORM_CONTENT_TYPE = "Content-Type"
FORM_CONTENT_DISPOSITION = "Content-Disposition"
FORM_POLICY = "policy"
FORM_ALGORITHM = "x-amz-algorithm"
FORM_CREDENTIAL = "x-amz-credential"
FORM_DATE = "x-amz-date"
FORM_SIGNATURE = "x-amz-signature"
FORM_SECURITY_TOKEN = "x-amz-security-token"
FORM_SUCCESS_ACTION_STATUS = "success_action_status"
FORM_FILE = "file"

# policy conditions that have no form field of their own
CONDITION_BUCKET = "bucket"
CONDITION_CONTENT_LENGTH_RANGE = "content-length-range"
