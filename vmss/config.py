from pulumi import Config

from modules.compute import ScaleSetSpecs
from modules.identity import IdentitySpecs
from modules.network import NetworkSpecs


az_native_config = Config("azure-native")
location: str = az_native_config.require("location")

vmss_config = Config()
# Environment configuration
resource_prefix: str = vmss_config.require("resource_prefix")
tags: dict = vmss_config.get_object("tags") or {}

# Resource specs
network_specs = NetworkSpecs(**(vmss_config.get_object("network") or {}))
identity_specs = IdentitySpecs(**(vmss_config.get_object("identity") or {}))
scale_set_specs = ScaleSetSpecs(**(vmss_config.get_object("scale_set") or {}))
