# __main__.py
"""
Pulumi program to create an Azure Virtual Machine Scale Set running under a
User Assigned Identity.
"""

import modulepath_fixer  # noqa: F401

import os

from pulumi import log, ResourceOptions
import pulumi_azure_native as azure_native

from modules.compute import ScaleSet
from modules.identity import ManagedIdentity
from modules.network import NetworkChain
from utils.module_dataclasses import StackOutputs
from utils.utils import merge_tags, user_assigned_identity_ids

try:
    from config import (
        identity_specs,
        location,
        network_specs,
        resource_prefix,
        scale_set_specs,
        tags,
    )
except (TypeError, ValueError) as e:
    log.error(f"Invalid stack configuration: {e}")
    raise

DEBUG = os.getenv("DEBUG")
default_tags = merge_tags(
    {
        "environment": "dev",
        "created_by": "pulumi",
        "purpose": "vmss",
    },
    tags,
)


resource_group = azure_native.resources.ResourceGroup(
    f"{resource_prefix}_rg",
    location=location,
    tags=default_tags,
)
default_opts = ResourceOptions(parent=resource_group)

network = NetworkChain(
    name=resource_prefix,
    network_spec=network_specs,
    resource_group=resource_group,
    opts=default_opts,
    tags=default_tags,
)
env_spec = network.environment()

identity = ManagedIdentity(
    name=f"{resource_prefix}-identity",
    identity_spec=identity_specs,
    resource_group=resource_group,
    opts=default_opts,
    tags=default_tags,
)

if DEBUG:
    log.info(
        f"Declaring scale set {scale_set_specs.name} with capacity "
        f"{scale_set_specs.capacity} ({scale_set_specs.sku_name})"
    )

scale_set = ScaleSet(
    name=f"{resource_prefix}-vmss",
    scale_set_spec=scale_set_specs,
    env_spec=env_spec,
    identity_ids=user_assigned_identity_ids(identity.identity),
    opts=ResourceOptions(parent=network.subnet),
)

StackOutputs(
    resource_group_name=resource_group.name,
    virtual_network_name=network.virtual_network.name,
    subnet_id=network.subnet.id,
    network_interface_id=network.network_interface.id,
    identity_id=identity.identity_id,
    identity_principal_id=identity.principal_id,
    identity_client_id=identity.client_id,
    scale_set_name=scale_set.scale_set.name,
    admin_username=scale_set_specs.admin_username,
    admin_password=scale_set.admin_password,
).export()
