"""Parsing of AWS role attributes out of SAML assertions."""

from __future__ import annotations

import base64
import binascii
import xml.etree.ElementTree as ET
from dataclasses import dataclass

SAML_ROLE_ATTRIBUTE = "https://aws.amazon.com/SAML/Attributes/Role"
SAML_ASSERTION_NS = "{urn:oasis:names:tc:SAML:2.0:assertion}"


class SamlAssertionError(ValueError):
    """Raised when an assertion cannot be decoded."""


@dataclass(frozen=True, slots=True)
class SamlRole:
    """An IAM role the assertion allows, with its SAML identity provider."""

    role_arn: str
    principal_arn: str


def parse_roles(assertion: str) -> list[SamlRole]:
    """
    Extract the roles listed in a base64-encoded SAML assertion.

    Each role attribute value is a comma-separated pair of a role ARN and a
    ``saml-provider`` ARN, in either order. Malformed values are skipped.

    Raises:
        SamlAssertionError: If the assertion is not base64-encoded XML.
    """
    try:
        root = ET.fromstring(base64.b64decode(assertion, validate=False))
    except (binascii.Error, ET.ParseError) as e:
        msg = f"invalid SAML assertion: {e}"
        raise SamlAssertionError(msg) from e

    roles: list[SamlRole] = []
    for attribute in root.iter(f"{SAML_ASSERTION_NS}Attribute"):
        if attribute.get("Name") != SAML_ROLE_ATTRIBUTE:
            continue
        for value in attribute.iter(f"{SAML_ASSERTION_NS}AttributeValue"):
            role = _parse_role_value(value.text or "")
            if role:
                roles.append(role)
    return roles


def _parse_role_value(text: str) -> SamlRole | None:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        return None

    role_arn = next((p for p in parts if ":role/" in p), None)
    principal_arn = next((p for p in parts if ":saml-provider/" in p), None)
    if not role_arn or not principal_arn:
        return None
    return SamlRole(role_arn=role_arn, principal_arn=principal_arn)
