import logging

from endorser.common.logs import Logs
from endorser.common.cfg import Config

logger = logging.getLogger(__name__)


class App:
    def __init__(self):
        self.cfg = Config()

    def logs(self, screen=True):
        info = self.cfg.get()
        Logs(info.get("logs"), debug=info.get("debug"), screen=screen)

    def main(self, info):
        raise NotImplementedError

    def init(self, argv=None):
        if not self.cfg.parse(argv):
            return -1

        self.logs()
        app_args = self.cfg.get()

        try:
            return self.main(app_args)
        finally:
            logger.info("App shutdown complete")
