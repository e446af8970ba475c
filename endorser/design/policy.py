import re
import logging

import yaml
from yaml import load, dump

from endorser.design.identities import Principals, MalformedPolicy


logger = logging.getLogger(__name__)


SIGNED_BY = "signed-by"
N_OF = re.compile(r"^(\d+)-of$")


class NoAliasDumper(yaml.SafeDumper):
    def ignore_aliases(self, data):
        return True


class Leaf:
    def __init__(self, principal):
        self.principal = principal

    def __repr__(self):
        return f"Leaf({self.principal})"

    def leaves(self):
        return [self]

    def depth(self):
        return 1

    def size(self):
        return 1

    def dump(self):
        return {SIGNED_BY: self.principal}


class Threshold:
    def __init__(self, required, children):
        self.required = required
        self.children = tuple(children)

    def __repr__(self):
        return f"Threshold({self.required}, {list(self.children)})"

    def leaves(self):
        leaves = []
        for child in self.children:
            leaves.extend(child.leaves())
        return leaves

    def depth(self):
        return 1 + max(child.depth() for child in self.children)

    def size(self):
        return 1 + sum(child.size() for child in self.children)

    def dump(self):
        key = f"{self.required}-of"
        return {key: [child.dump() for child in self.children]}


def parse_tree(data, size=None):
    """Parses an endorsement policy tree into Leaf and Threshold nodes

    Arguments:
        data {dict} -- Either {"signed-by": index} or {"<n>-of": [nodes]}

    Keyword Arguments:
        size {int} -- Amount of declared principals, when given signed-by
        indexes are checked against it (default: {None})

    Raises:
        MalformedPolicy -- If any node of the tree is not well formed

    Returns:
        Leaf or Threshold -- The root node of the tree
    """
    if not isinstance(data, dict) or len(data) != 1:
        raise MalformedPolicy(f"Policy node must have exactly one key: {data}")

    key, value = next(iter(data.items()))

    if key == SIGNED_BY:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise MalformedPolicy(f"signed-by must be a non-negative integer: {value}")
        if size is not None and value >= size:
            raise MalformedPolicy(
                f"signed-by {value} refers to an unknown principal (declared {size})"
            )
        return Leaf(value)

    match = N_OF.match(str(key))
    if not match:
        raise MalformedPolicy(f"Unknown policy node key: {key}")

    required = int(match.group(1))

    if not isinstance(value, list):
        raise MalformedPolicy(f"{key} must hold a list of policies: {value}")

    if required == 0:
        raise MalformedPolicy(f"{key} requires no signature at all")

    if required > len(value):
        raise MalformedPolicy(
            f"{key} requires more signatures than its {len(value)} policies"
        )

    children = [parse_tree(child, size=size) for child in value]
    return Threshold(required, children)


class Policy:
    def __init__(self, principals, tree):
        self.principals = principals
        self.tree = tree

    def __repr__(self):
        return f"Policy({self.principals!r}, {self.tree!r})"

    @classmethod
    def parse(cls, data):
        if not isinstance(data, dict):
            raise MalformedPolicy(f"Policy document must be a mapping: {data}")

        if "identities" not in data or "policy" not in data:
            raise MalformedPolicy("Policy document must have identities and policy")

        principals = Principals.parse(data.get("identities"))
        tree = parse_tree(data.get("policy"), size=len(principals))

        logger.debug(
            f"Policy parsed: {len(principals)} principals, "
            f"{tree.size()} nodes, depth {tree.depth()}"
        )
        return cls(principals, tree)

    def dump(self):
        policy = {
            "identities": self.principals.dump(),
            "policy": self.tree.dump(),
        }
        return policy

    @classmethod
    def load(cls, filename):
        with open(filename, "r") as f:
            data = load(f, Loader=yaml.SafeLoader)

        logger.debug(f"Policy file loaded {filename}")
        return cls.parse(data)

    def save(self, filename):
        with open(filename, "w") as f:
            dump(
                self.dump(),
                f,
                indent=4,
                default_flow_style=False,
                explicit_start=True,
                Dumper=NoAliasDumper,
            )

        logger.debug(f"Policy file saved {filename}")
