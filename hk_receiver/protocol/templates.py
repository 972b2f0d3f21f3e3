# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Request templates.

A template is an XML document in the template directory named
'<template_id>.xml', containing the tokens '{{ name }}', '{{ zone }}'
and '{{ para }}'.
"""

from __future__ import annotations

import os

from ..internal_types import *
from ..constants import DEFAULT_TEMPLATE_ID, DEFAULT_TEMPLATE_DIR
from ..exceptions import HkReceiverTemplateNotFoundError
from ..pkg_logging import logger
from .constants import NAME_PLACEHOLDER, ZONE_PLACEHOLDER, PARA_PLACEHOLDER

def template_filename(template_id: str, template_dir: Optional[str]=None) -> str:
    """Returns the pathname of the template file for a template id."""
    if template_dir is None:
        template_dir = DEFAULT_TEMPLATE_DIR
    return os.path.join(template_dir, f"{template_id}.xml")

def load_template(template_id: str, template_dir: Optional[str]=None) -> str:
    """Reads the text of a template.

    Raises HkReceiverTemplateNotFoundError if the file cannot be read.
    """
    filename = template_filename(template_id, template_dir)
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        raise HkReceiverTemplateNotFoundError(template_id, filename) from e

def render_template(
        template: str,
        action: str,
        zone: str,
        parameter: Optional[str]=None,
      ) -> str:
    """Substitutes the action, zone and parameter into template text, and
       strips surrounding whitespace. A missing parameter becomes ''."""
    result = (template
        .replace(NAME_PLACEHOLDER, action)
        .replace(ZONE_PLACEHOLDER, zone)
        .replace(PARA_PLACEHOLDER, '' if parameter is None else str(parameter)))
    return result.strip()

def generate_request(
        action: str,
        zone: str,
        parameter: Optional[str]=None,
        template_id: str=DEFAULT_TEMPLATE_ID,
        template_dir: Optional[str]=None,
      ) -> str:
    """Builds a request body from a named template."""
    template = load_template(template_id, template_dir)
    result = render_template(template, action, zone, parameter)
    logger.debug(f"Generated '{template_id}' request: action={action!r}, zone={zone!r}, parameter={parameter!r}")
    return result
