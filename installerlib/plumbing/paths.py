"""
Host constants for the locations and identities used when installing the agent.
"""

import os.path


INSTALLER_USER = "dd-installer"
"""
Unprivileged user the installer runs as.
"""

AGENT_GROUP = "dd-agent"
"""
Group the installer must belong to for agent units to load correctly.
"""

PACKAGES_DIR = "/opt/datadog-packages"
"""
Root of the extracted package repositories.
"""

AGENT_PACKAGE_DIR = os.path.join(PACKAGES_DIR, "datadog-agent", "stable")
"""
Currently installed stable agent package.
"""

UNIT_SOURCE_DIR = os.path.join(AGENT_PACKAGE_DIR, "systemd")
"""
Unit files shipped by the agent package, copied into `SYSTEMD_DIR` when loaded.
"""

SYSTEMD_DIR = "/etc/systemd/system"
"""
Directory systemd reads administrator-installed units from.
"""

HELPER = os.path.join(PACKAGES_DIR, "datadog-installer", "stable", "bin", "installer", "helper")
"""
Privileged helper executable, accepting a single JSON request argument.
"""

AGENT_SYMLINK = "/usr/bin/datadog-agent"
"""
Stable path to the agent binary, exposed on the default `PATH`.
"""

AGENT_BINARY = os.path.join(AGENT_PACKAGE_DIR, "bin", "agent", "agent")
"""
Target of `AGENT_SYMLINK`.
"""

CONFIG_DIR = "/etc/datadog-agent"
"""
Agent configuration directory, also holding the install-info marker.
"""

INSTALL_INFO = os.path.join(CONFIG_DIR, "install_info")
"""
YAML record describing the installation method.
"""

INSTALL_SIGNATURE = os.path.join(CONFIG_DIR, "install.json")
"""
JSON record identifying this particular installation.
"""
