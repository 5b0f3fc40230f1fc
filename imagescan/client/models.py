"""
Module containing models for the data returned by the image scanning service.
"""

import itertools
import re
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, constr


# The preferred references, in order of preference
PREFERRED_REFERENCES = [
    'cve.mitre.org',
    'redhat.com',
    'debian.org',
    'gentoo.org',
    'opensuse.org',
    'suse.com',
    'python.org',
    'oracle.com',
]

# Super-simple regex to extract a URL
URL_REGEX = re.compile(r'(https?://\S+)')


class ScanModel(BaseModel):
    """
    Base class for all scan models.

    Models are immutable and can be populated using either the field names or
    the names used on the wire.
    """
    model_config = ConfigDict(frozen = True, populate_by_name = True)


class Vulnerability(ScanModel):
    """
    A single vulnerability found in a package.
    """
    #: The CVE (or vendor) identifier of the vulnerability
    cve: constr(min_length = 1) = Field(alias = 'VulnerabilityID')
    #: The name of the affected package
    package: str = Field(alias = 'PkgName')
    #: The installed version of the package
    installed_version: str = Field(alias = 'InstalledVersion')
    #: The version that fixes the vulnerability, empty if there is no fix
    fixed_version: str = Field('', alias = 'FixedVersion')
    title: str = Field('', alias = 'Title')
    description: str = Field('', alias = 'Description')
    #: The severity as reported by the scanner, e.g. CRITICAL or LOW
    severity: str = Field(alias = 'Severity')
    references: List[str] = Field(default_factory = list, alias = 'References')

    @field_validator('references', mode = 'before')
    def null_references(cls, references):
        return [] if references is None else references

    @property
    def fixable(self):
        return bool(self.fixed_version)

    @property
    def info_url(self) -> Optional[str]:
        """
        The preferred URL from the references for the vulnerability.
        """
        # Some Trivy references aren't just URLs, but do have URLs embedded in them
        # So extract the urls from the references
        reference_urls = list(itertools.chain.from_iterable(
            URL_REGEX.findall(reference)
            for reference in self.references
        ))
        # Return one of the preferred URLs if possible
        for pref in PREFERRED_REFERENCES:
            try:
                return next(url for url in reference_urls if pref in url)
            except StopIteration:
                pass
        # By default, return the first url
        return next(iter(reference_urls), None)


class ScanTarget(ScanModel):
    """
    A scanned location within an image, e.g. an OS package database or a lock file.
    """
    target: str = Field(alias = 'Target')
    vulnerabilities: List[Vulnerability] = Field(default_factory = list, alias = 'Vulnerabilities')

    @field_validator('vulnerabilities', mode = 'before')
    def null_vulnerabilities(cls, vulnerabilities):
        # Trivy reports null rather than an empty list for a clean target
        return [] if vulnerabilities is None else vulnerabilities


class ScanResult(ScanModel):
    """
    Detailed scan result for a single image.
    """
    #: The image as given for scanning
    image: constr(min_length = 1)
    #: The coarse status of the scan
    scan_result: str = Field(alias = 'scanResult')
    description: str = ''
    targets: List[ScanTarget] = Field(default_factory = list)

    @field_validator('targets', mode = 'before')
    def null_targets(cls, targets):
        return [] if targets is None else targets

    @property
    def vulnerabilities(self):
        """
        Iterate the vulnerabilities from all the targets, in order.
        """
        return itertools.chain.from_iterable(t.vulnerabilities for t in self.targets)


class SeverityCount(ScanModel):
    """
    The number of vulnerabilities found with a particular severity.
    """
    severity: str
    count: int


class ScanResultSummary(ScanModel):
    """
    Summary of the scan result for a single image.
    """
    image: constr(min_length = 1)
    scan_result: str = Field(alias = 'scanResult')
    description: str = ''
    counters: List[SeverityCount] = Field(default_factory = list)

    @field_validator('counters', mode = 'before')
    def null_counters(cls, counters):
        return [] if counters is None else counters

    @property
    def counts(self) -> Dict[str, int]:
        return { c.severity: c.count for c in self.counters }

    @property
    def total(self) -> int:
        return sum(c.count for c in self.counters)
