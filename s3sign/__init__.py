__version__ = '1.0.0'

from . import models, exceptions, defaults

from .api import S3
from .auth import AuthV4, ProviderAuthV4, make_auth, credential_scope, signing_key
from .policy import PostPolicy
from .http import Session, Request, CaseInsensitiveDict
from .credentials import (Credentials, CredentialsProvider, StaticCredentialsProvider,
                          IamCredentialsProvider, IamCredentialsFetcher)

from .models import UploadConfig, UploadPolicies, UploadResponse

from .utils import to_bytes, to_string, encode_path, encode_query_component, http_date

import logging

logger = logging.getLogger('s3sign')

_DEFAULT_LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(thread)d : %(message)s"


def _add_handler(handler, name, level, format_string):
    global logger
    logger = logging.getLogger(name)
    logger.setLevel(level)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string or _DEFAULT_LOG_FORMAT))
    logger.addHandler(handler)
    return handler


def set_file_logger(file_path, name="s3sign", level=logging.INFO, format_string=None):
    return _add_handler(logging.FileHandler(file_path), name, level, format_string)


def set_stream_logger(name='s3sign', level=logging.DEBUG, format_string=None):
    return _add_handler(logging.StreamHandler(), name, level, format_string)
