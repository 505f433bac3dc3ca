# -*- coding: utf-8 -*-

"""
s3sign.xml_utils
~~~~~~~~~~~~~~~~

XML处理相关。parse_开头的函数用来解析服务器端返回的XML。
"""
import logging
import xml.etree.ElementTree as ElementTree

from .exceptions import ClientError, ElementTreeParseError
from .utils import to_string

logger = logging.getLogger(__name__)


def _find_tag_with_default(parent, path, default_value):
    child = parent.find(path)
    if child is None:
        return default_value

    if child.text is None:
        return ''

    return to_string(child.text)


def parse_upload_response(result, body):
    try:
        root = ElementTree.fromstring(body)
    except ElementTreeParseError as e:
        logger.error("Invalid PostResponse body: {0!r}".format(body))
        raise ClientError('parse xml: {0}'.format(e))

    result.location = _find_tag_with_default(root, 'Location', '')
    result.bucket = _find_tag_with_default(root, 'Bucket', '')
    result.key = _find_tag_with_default(root, 'Key', '')
    result.etag = _find_tag_with_default(root, 'ETag', '').strip('"')

    return result
