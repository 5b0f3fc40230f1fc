"""
Settings for the image scanning client.
"""

import os
from typing import Optional

from pydantic import BaseModel, ValidationError, constr, confloat

from flexi_settings import include

from .exceptions import InvalidSettings


class ClientSettings(BaseModel):
    """
    Model defining settings for the image scanning client.
    """
    #: The base URL of the scanning service
    url: constr(min_length = 1)
    #: The timeout for requests in seconds, or None to wait indefinitely
    timeout: Optional[confloat(gt = 0)] = 30.0


def from_dict(config):
    """
    Build a settings object from a dictionary.
    """
    try:
        return ClientSettings(**config)
    except ValidationError as exc:
        raise InvalidSettings(str(exc)) from exc


def from_file(config_file):
    """
    Build a settings object from a config file.
    """
    config = dict()
    include(config_file, config)
    return from_dict(config)


def from_env_file(var_name = 'IMAGESCAN_CLIENT_CONFIG', default_file = '/etc/imagescan/client.conf'):
    """
    Build a settings object from a config file specified by an environment variable.
    """
    return from_file(os.environ.get(var_name, default_file))
