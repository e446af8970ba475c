import logging

from endorser.design.identities import MEMBER


logger = logging.getLogger(__name__)


class Peer:
    def __init__(self, name, mspid, role=MEMBER, **info):
        self.name = name
        self.mspid = mspid
        self.role = role
        self.info = info

    def __repr__(self):
        return f"Peer({self.name!r}, {self.mspid!r}, {self.role!r})"

    def get_name(self):
        return self.name

    def get_mspid(self):
        return self.mspid

    def get_role(self):
        return self.role

    def dump(self):
        peer = {
            "name": self.name,
            "mspid": self.mspid,
            "role": self.role,
        }
        peer.update(self.info)
        return peer


def load_peers(data):
    """Builds the pool of candidate peers out of a list of peer entries

    Arguments:
        data {list} -- Entries as {"name": ..., "mspid": ..., "role": ...},
        role defaults to member, any other key is kept as peer info

    Raises:
        ValueError -- If data is not a list of mappings or an entry
        misses its name or mspid

    Returns:
        list -- Peers in the same order as the entries
    """
    peers = []

    if data and not isinstance(data, list):
        raise ValueError(f"Peers must be a list of entries: {data}")

    for entry in data or []:
        if not isinstance(entry, dict):
            raise ValueError(f"Peer entry must be a mapping: {entry}")

        info = dict(entry)
        name = info.pop("name", None)
        mspid = info.pop("mspid", None)
        role = info.pop("role", MEMBER)

        if not name or not mspid:
            raise ValueError(f"Peer entry must have name and mspid: {entry}")

        peers.append(Peer(name, mspid, role, **info))

    logger.debug(f"Loaded {len(peers)} peers")
    return peers
