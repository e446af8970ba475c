import logging
import argparse
import yaml

from endorser.engine.solver import STRATEGIES, FIRST_FIT

logger = logging.getLogger(__name__)


LOGS_FILE = "/tmp/endorser/logs/endorser.log"


class Config:
    def __init__(self):
        self._info = None
        self.cfg = {}
        self.parser = argparse.ArgumentParser(
            description="Endorser - picks peers that satisfy an endorsement policy"
        )

    def get(self):
        return self._info

    def get_cfg_attrib(self, name):
        try:
            value = getattr(self.cfg, name)
        except AttributeError as e:
            logger.debug(f"Argparser attrib name not found - exception {e}")
            value = None
        return value

    def load(self, filename):
        data = {}
        with open(filename, "r") as f:
            data = yaml.load(f, Loader=yaml.SafeLoader)
        return data

    def parse(self, argv=None):
        self.parser.add_argument(
            "--policy",
            type=str,
            help="Define the endorsement policy file, yaml or json (default: None)",
        )

        self.parser.add_argument(
            "--peers",
            type=str,
            help="Define the candidate peers file, yaml or json (default: None)",
        )

        self.parser.add_argument(
            "--strategy",
            type=str,
            default=FIRST_FIT,
            help=f"Define the solver strategy {'|'.join(STRATEGIES)} (default: {FIRST_FIT})",
        )

        self.parser.add_argument(
            "--strict",
            action="store_true",
            help="Only count peers that exactly match a declared identity (default: False)",
        )

        self.parser.add_argument(
            "--logs",
            type=str,
            default=LOGS_FILE,
            help=f"Define the logs file (default: {LOGS_FILE})",
        )

        self.parser.add_argument(
            "--debug",
            action="store_true",
            help="Define the app logging mode (default: False)",
        )

        self.cfg, _ = self.parser.parse_known_args(argv)

        info = self.check()
        if info:
            self._info = info
            return True

        return False

    def check(self):
        _policy, _peers = self.cfg.policy, self.cfg.peers

        if not (_policy and _peers):
            print(
                "Init cfg NOT provided - both must exist: policy and peers (provided values: %s, %s)"
                % (_policy, _peers)
            )
            return None

        if self.cfg.strategy not in STRATEGIES:
            print(
                f"App cfg args not OK: strategy {self.cfg.strategy} not in {STRATEGIES}"
            )
            return None

        info = {
            "policy": _policy,
            "peers": _peers,
            "strategy": self.cfg.strategy,
            "extend": not self.cfg.strict,
            "logs": self.cfg.logs,
            "debug": self.cfg.debug,
        }
        return info
