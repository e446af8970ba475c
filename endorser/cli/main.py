import sys
import logging

import yaml

from endorser.common.app import App
from endorser.design.policy import Policy
from endorser.design.peers import load_peers
from endorser.engine.selector import PeerSelector, PolicyUnsatisfiable
from endorser.cli.output import print_cli, format_peers


logger = logging.getLogger(__name__)


class CLI(App):
    def load_files(self, info):
        policy, peers = None, None
        error = ""

        try:
            policy = Policy.load(info.get("policy"))
            peers = load_peers(self.cfg.load(info.get("peers")))
        except (OSError, ValueError, yaml.YAMLError) as e:
            error = f"Load file error: {repr(e)}"
            logger.debug(error)
        else:
            logger.debug(f"Load files ok")

        return policy, peers, error

    def main(self, info):
        logger.info(f"Select triggered - policy {info.get('policy')}")

        policy, peers, error = self.load_files(info)

        if error:
            print_cli(None, err=error)
            return -1

        print_cli(
            f"Picking peers out of {len(peers)} candidates ({info.get('strategy')})"
        )

        selector = PeerSelector(strategy=info.get("strategy"), extend=info.get("extend"))

        try:
            selected = selector.select(peers, policy)
        except PolicyUnsatisfiable as e:
            logger.info(f"Policy not satisfied - {e}")
            print_cli(None, err=str(e))
            return 1

        print_cli(format_peers(selected), style="normal")
        return 0

    def run(self, argv=None):
        return self.init(argv)


def main():
    cli = CLI()
    return cli.run(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
