from typing import Optional
from attr import dataclass
import re

from pulumi import ComponentResource, Input, Output, ResourceOptions, log
from pulumi_azure_native import compute as az_compute
from pulumi_random import RandomPassword

from modules.network import EnvironmentSpecs


UPGRADE_MODES = {mode.value for mode in az_compute.UpgradeMode}
STORAGE_ACCOUNT_TYPES = {
    account_type.value for account_type in az_compute.StorageAccountTypes
}


@dataclass
class ScaleSetSpecs:
    name: str = "test_vmss"
    sku_name: str = "Standard_D2_v4"
    sku_tier: str = "Standard"
    capacity: int = 1
    upgrade_mode: str = "Automatic"
    admin_username: str = "testadmin"
    admin_password_version: str = "1"
    computer_name_prefix: str = "testvm"
    publisher: str = "Canonical"
    offer: str = "0001-com-ubuntu-minimal-jammy-daily"
    sku: str = "minimal-22_04-daily-lts-gen2"
    version: str = "latest"
    storage_account_type: str = "Standard_LRS"
    nic_name: str = "test_nic"
    ip_config_name: str = "test_ip_config"
    enable_accelerated_networking: bool = True
    disable_password_authentication: bool = False

    def __attrs_post_init__(self):
        if not re.match(r"^[A-Za-z0-9][A-Za-z0-9_.\-]{0,63}$", self.name):
            raise ValueError(
                f"name '{self.name}' contains invalid characters. Only letters, numbers, underscores, periods and hyphens are allowed (max 64)."  # noqa: E501
            )
        if not re.match(
            r"^[A-Za-z0-9][A-Za-z0-9\-]{0,57}$", self.computer_name_prefix
        ):
            raise ValueError(
                f"computer_name_prefix '{self.computer_name_prefix}' contains invalid characters. Only letters, numbers, and hyphens are allowed (max 58)."  # noqa: E501
            )
        if isinstance(self.capacity, bool) or not isinstance(
            self.capacity, int
        ):
            raise ValueError(
                f"capacity must be an integer, got {self.capacity!r}"
            )
        if self.capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {self.capacity}")
        if self.upgrade_mode not in UPGRADE_MODES:
            raise ValueError(
                f"upgrade_mode '{self.upgrade_mode}' must be one of {sorted(UPGRADE_MODES)}"  # noqa: E501
            )
        if self.storage_account_type not in STORAGE_ACCOUNT_TYPES:
            raise ValueError(
                f"storage_account_type '{self.storage_account_type}' must be one of {sorted(STORAGE_ACCOUNT_TYPES)}"  # noqa: E501
            )
        if not self.admin_username:
            raise ValueError("admin_username must not be empty.")


def build_sku(spec: ScaleSetSpecs) -> az_compute.SkuArgs:
    return az_compute.SkuArgs(
        name=spec.sku_name,
        tier=spec.sku_tier,
        capacity=spec.capacity,
    )


def build_identity(
    identity_ids: list[Input[str]],
) -> az_compute.VirtualMachineScaleSetIdentityArgs:
    return az_compute.VirtualMachineScaleSetIdentityArgs(
        type=az_compute.ResourceIdentityType.USER_ASSIGNED,
        user_assigned_identities=identity_ids,
    )


def build_os_profile(
    spec: ScaleSetSpecs, admin_password: Input[str]
) -> az_compute.VirtualMachineScaleSetOSProfileArgs:
    return az_compute.VirtualMachineScaleSetOSProfileArgs(
        admin_username=spec.admin_username,
        admin_password=admin_password,
        computer_name_prefix=spec.computer_name_prefix,
        linux_configuration=az_compute.LinuxConfigurationArgs(
            disable_password_authentication=spec.disable_password_authentication,  # noqa: E501
        ),
    )


def build_storage_profile(
    spec: ScaleSetSpecs,
) -> az_compute.VirtualMachineScaleSetStorageProfileArgs:
    return az_compute.VirtualMachineScaleSetStorageProfileArgs(
        os_disk=az_compute.VirtualMachineScaleSetOSDiskArgs(
            create_option=az_compute.DiskCreateOptionTypes.FROM_IMAGE,
            managed_disk=az_compute.VirtualMachineScaleSetManagedDiskParametersArgs(  # noqa: E501
                storage_account_type=az_compute.StorageAccountTypes(
                    spec.storage_account_type
                ),
            ),
        ),
        image_reference=az_compute.ImageReferenceArgs(
            publisher=spec.publisher,
            offer=spec.offer,
            sku=spec.sku,
            version=spec.version,
        ),
    )


def build_network_profile(
    spec: ScaleSetSpecs, subnet_id: Input[str]
) -> az_compute.VirtualMachineScaleSetNetworkProfileArgs:
    return az_compute.VirtualMachineScaleSetNetworkProfileArgs(
        network_interface_configurations=[
            az_compute.VirtualMachineScaleSetNetworkConfigurationArgs(
                name=spec.nic_name,
                primary=True,
                enable_accelerated_networking=spec.enable_accelerated_networking,  # noqa: E501
                ip_configurations=[
                    az_compute.VirtualMachineScaleSetIPConfigurationArgs(
                        name=spec.ip_config_name,
                        subnet=az_compute.ApiEntityReferenceArgs(
                            id=subnet_id,
                        ),
                    )
                ],
            )
        ],
    )


class ScaleSet(ComponentResource):
    """
    Create a Virtual Machine Scale Set running under a User Assigned
    Identity, with its instances attached to the environment subnet.
    """

    def __init__(
        self,
        name: str,
        scale_set_spec: ScaleSetSpecs,
        env_spec: EnvironmentSpecs,
        identity_ids: list[Input[str]],
        opts: Optional[ResourceOptions] = None,
    ):
        super().__init__("azvmss:compute:ScaleSet", name, None, opts)

        self.opts = ResourceOptions.merge(opts, ResourceOptions(parent=self))

        log.debug(f"Declaring scale set {scale_set_spec.name}")

        self.password = RandomPassword(
            f"{scale_set_spec.name}-basic-auth-{scale_set_spec.admin_username}-password",  # noqa: E501
            length=16,
            keepers={"version": scale_set_spec.admin_password_version},
            lower=True,
            upper=True,
            special=True,
            override_special="!#%^*_+=-./?~",
            numeric=True,
            min_lower=1,
            min_upper=1,
            min_numeric=1,
            min_special=1,
            opts=self.opts,
        )
        self.admin_password: Output[str] = Output.secret(self.password.result)

        self.scale_set_opts = ResourceOptions.merge(
            self.opts,
            ResourceOptions(depends_on=[env_spec.network_interface]),
        )

        self.scale_set = az_compute.VirtualMachineScaleSet(
            scale_set_spec.name,
            resource_group_name=env_spec.resource_group.name,
            location=env_spec.resource_group.location,
            vm_scale_set_name=scale_set_spec.name,
            identity=build_identity(identity_ids),
            sku=build_sku(scale_set_spec),
            upgrade_policy=az_compute.UpgradePolicyArgs(
                mode=az_compute.UpgradeMode(scale_set_spec.upgrade_mode),
            ),
            virtual_machine_profile=az_compute.VirtualMachineScaleSetVMProfileArgs(  # noqa: E501
                os_profile=build_os_profile(
                    scale_set_spec, self.admin_password
                ),
                storage_profile=build_storage_profile(scale_set_spec),
                network_profile=build_network_profile(
                    scale_set_spec, env_spec.subnet.id
                ),
            ),
            opts=self.scale_set_opts,
            tags=env_spec.tags,
        )

        self.register_outputs(
            {
                "scale_set_name": self.scale_set.name,
                "admin_username": scale_set_spec.admin_username,
            }
        )
