# This file is part of ec2-instance-check. See LICENSE file for license information.
"""Inspect EC2 instance meta-data and user-data from a test suite."""

from ec2instance.resource import MetadataResource

__version__ = "0.1.0"

__all__ = ["MetadataResource", "__version__"]
