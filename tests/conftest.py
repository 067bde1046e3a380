"""Shared pytest setup: every test runs against the Azure mocks."""

import pulumi

from helpers import MOCKS

pulumi.runtime.set_mocks(MOCKS, project="vmss", stack="test", preview=False)
