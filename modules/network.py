import ipaddress
from typing import Optional

from attr import dataclass, field
from pulumi import ComponentResource, ResourceOptions, log
from pulumi_azure_native import (
    network as az_network,
    resources as az_resources,
)


@dataclass
class EnvironmentSpecs:
    resource_group: az_resources.ResourceGroup
    vnet: az_network.VirtualNetwork
    subnet: az_network.Subnet
    network_interface: az_network.NetworkInterface
    tags: Optional[dict] = None


@dataclass
class NetworkSpecs:
    address_prefixes: list[str] = field(factory=lambda: ["10.1.0.0/16"])
    subnet_address_prefix: str = "10.1.0.0/24"
    ip_config_name: str = "test_ip_config"
    private_ip_allocation_method: str = "Dynamic"

    def __attrs_post_init__(self):
        if not self.address_prefixes:
            raise ValueError("address_prefixes must hold at least one prefix.")

        networks = [
            self.__parse("address_prefixes", prefix)
            for prefix in self.address_prefixes
        ]
        subnet = self.__parse(
            "subnet_address_prefix", self.subnet_address_prefix
        )

        if not any(
            subnet.version == net.version and subnet.subnet_of(net)
            for net in networks
        ):
            raise ValueError(
                f"subnet_address_prefix '{self.subnet_address_prefix}' is not inside any of {self.address_prefixes}."  # noqa: E501
            )

        if self.private_ip_allocation_method not in ("Dynamic", "Static"):
            raise ValueError(
                f"private_ip_allocation_method '{self.private_ip_allocation_method}' must be 'Dynamic' or 'Static'."  # noqa: E501
            )

    @staticmethod
    def __parse(field_name: str, prefix: str):
        try:
            return ipaddress.ip_network(prefix)
        except ValueError as exc:
            raise ValueError(
                f"{field_name} '{prefix}' is not a valid CIDR network: {exc}"
            ) from exc


class NetworkChain(ComponentResource):
    """
    Create a Virtual Network, a Subnet inside it and a Network Interface
    attached to that Subnet.
    """

    def __init__(
        self,
        name: str,
        network_spec: NetworkSpecs,
        resource_group: az_resources.ResourceGroup,
        opts: Optional[ResourceOptions] = None,
        tags: Optional[dict] = None,
    ):
        super().__init__("azvmss:network:NetworkChain", name, None, opts)

        self.opts = ResourceOptions.merge(opts, ResourceOptions(parent=self))
        self.resource_group = resource_group
        self.tags = tags

        log.debug(f"Declaring network chain {name}")

        self.virtual_network = az_network.VirtualNetwork(
            f"{name}_vnet",
            resource_group_name=resource_group.name,
            address_space=az_network.AddressSpaceArgs(
                address_prefixes=network_spec.address_prefixes,
            ),
            opts=self.opts,
            tags=tags,
        )

        self.subnet = az_network.Subnet(
            f"{name}_subnet",
            resource_group_name=resource_group.name,
            virtual_network_name=self.virtual_network.name,
            address_prefix=network_spec.subnet_address_prefix,
            opts=ResourceOptions(parent=self.virtual_network),
        )

        self.network_interface = az_network.NetworkInterface(
            f"{name}_nic",
            location=resource_group.location,
            resource_group_name=resource_group.name,
            ip_configurations=[
                az_network.NetworkInterfaceIPConfigurationArgs(
                    name=network_spec.ip_config_name,
                    private_ip_allocation_method=network_spec.private_ip_allocation_method,  # noqa: E501
                    subnet=az_network.SubnetArgs(
                        id=self.subnet.id,
                    ),
                )
            ],
            opts=ResourceOptions(parent=self.subnet),
            tags=tags,
        )

        self.register_outputs(
            {
                "virtual_network_name": self.virtual_network.name,
                "subnet_id": self.subnet.id,
                "network_interface_id": self.network_interface.id,
            }
        )

    def environment(self) -> EnvironmentSpecs:
        return EnvironmentSpecs(
            resource_group=self.resource_group,
            vnet=self.virtual_network,
            subnet=self.subnet,
            network_interface=self.network_interface,
            tags=self.tags,
        )
