import code
import logging

from installerlib import plumbing as p
from installerlib.host import HelperHost, Host
from installerlib.plumbing.common import *
from installerlib.tasks import agent
from installerlib.units import *


host = HelperHost()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    code.interact(local=globals())
