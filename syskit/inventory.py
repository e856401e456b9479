from typing import Dict, List, Optional

import yaml
from nornir.core.inventory import ConnectionOptions, Defaults, Groups, Host, Hosts, Inventory

from syskit.core.settings import AppSettings
from syskit.utils.linux import LOCAL_PLATFORM

LOCAL_HOST_NAME = "localhost"
LOCAL_GROUP = "local_machine"


def load_hosts_file(path: str) -> Dict[str, dict]:
    """
    Loads the hosts YAML:

        web01:
          hostname: 10.0.0.5
          username: admin
          groups: [webservers]
    """
    try:
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}


def _local_host(data: dict) -> Host:
    return Host(name=LOCAL_HOST_NAME, hostname=LOCAL_HOST_NAME, platform=LOCAL_PLATFORM, data=data)


def _remote_host(name: str, host_data: dict, data: dict) -> Host:
    return Host(
        name=name,
        hostname=host_data.get("hostname", name),
        username=host_data.get("username"),
        password=host_data.get("password"),
        port=host_data.get("port", 22),
        platform=host_data.get("platform", "linux"),
        data={**data, "groups": host_data.get("groups", [])},
        connection_options={
            "scrapli": ConnectionOptions(extras={"auth_strict_key": False}),
        },
    )


def select_hosts(hosts_yaml: Dict[str, dict], target: Optional[str]) -> List[str]:
    """
    Names of the inventory entries matching `target`:
    None -> none (local machine only), "all" -> every entry,
    otherwise an entry name or a group name.
    """
    if not target:
        return []
    if target == "all":
        return list(hosts_yaml)
    if target in hosts_yaml:
        return [target]
    return [name for name, host_data in hosts_yaml.items() if target in host_data.get("groups", [])]


def build_inventory(settings: AppSettings, target: Optional[str] = None) -> Inventory:
    """
    Inventory for one run. Without a target only the local machine is used;
    entries in the `local_machine` group also map to the local connector.
    """
    data = {"app_config": settings}
    hosts = Hosts()

    if not target or target == LOCAL_HOST_NAME:
        hosts[LOCAL_HOST_NAME] = _local_host(data)
        return Inventory(hosts=hosts, groups=Groups(), defaults=Defaults())

    hosts_yaml = load_hosts_file(settings.inventory_file)
    for name in select_hosts(hosts_yaml, target):
        host_data = hosts_yaml[name] or {}
        if LOCAL_GROUP in host_data.get("groups", []):
            hosts[LOCAL_HOST_NAME] = _local_host(data)
        else:
            hosts[name] = _remote_host(name, host_data, data)

    return Inventory(hosts=hosts, groups=Groups(), defaults=Defaults())
