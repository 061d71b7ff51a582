import os.path
import re

from setuptools import find_packages, setup

try:
    # Import all script providers so that ENTRYPOINTS gets populated.
    from installerlib.scripts import agent, helper  # noqa: F401
    from installerlib.scripts.utils import ENTRYPOINTS
except ImportError:
    # Avoid chicken-and-egg dependency requirements during initial installation.
    # This means you need to re-run setup in order to gain script entrypoints.
    ENTRYPOINTS = []


HERE = os.path.abspath(os.path.dirname(__file__))

README = os.path.join(HERE, "README.rst")


def version():
    with open(os.path.join(HERE, "debian", "changelog")) as log:
        first = next(l for l in log if l.strip())
    return re.split("[()]", first)[1].replace("~", "")


setup(name="installerlib",
      version=version(),
      description="Installation and lifecycle management of the agent's systemd units.",
      long_description=open(README).read(),
      long_description_content_type="text/x-rst",
      platforms=["Linux"],
      python_requires=">=3.6",
      install_requires=["docopt", "PyYAML"],
      packages=find_packages(exclude=["tests"]),
      entry_points={"console_scripts": ENTRYPOINTS})
