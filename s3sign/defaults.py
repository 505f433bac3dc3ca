# -*- coding: utf-8 -*-

"""
s3sign.defaults
~~~~~~~~~~~~~~~

Global Default variables.

"""


def get(value, default_value):
    if value is None:
        return default_value
    else:
        return value


#: connection timeout
connect_timeout = 60

#: Validity window of a POST upload policy, in seconds.
upload_expiry = 60 * 60

#: Upper bound of X-Amz-Expires for presigned URLs, in seconds (7 days).
max_presign_expiry = 7 * 24 * 60 * 60

#: Endpoint used when no custom endpoint is set, filled with the region.
endpoint_format = 'https://s3.{0}.amazonaws.com'

#: Instance metadata endpoint listing the IAM role of the instance.
security_credentials_url = 'http://169.254.169.254/latest/meta-data/iam/security-credentials/'

#: Timeout of each instance metadata request, in seconds.
metadata_timeout = 10
