import logging
from collections import OrderedDict

from endorser.design.identities import Principal, MEMBER
from endorser.design.policy import Policy
from endorser.engine.solver import Solver, Unsatisfiable, FIRST_FIT


logger = logging.getLogger(__name__)


class PolicyUnsatisfiable(Unsatisfiable):
    def __init__(self, policy, sizes):
        self.policy = policy
        self.sizes = sizes
        Unsatisfiable.__init__(
            self, f"Error, supplied peers cannot match policy (pool sizes {sizes})"
        )


class PeerSelector:
    """Picks, out of a larger pool, the peers that satisfy an endorsement policy.

    With extend set, pool buckets with no declared principal, but from an
    organization that has a declared member principal, are registered as
    extra principals after the declared ones. They never appear in the
    policy tree and only stand in for member leaves of their organization.
    """

    def __init__(self, strategy=FIRST_FIT, extend=True):
        self.strategy = strategy
        self.extend = extend

    def buckets(self, peers):
        buckets = OrderedDict()
        for peer in peers:
            key = (peer.get_mspid(), peer.get_role())
            buckets.setdefault(key, []).append(peer)
        return buckets

    def registry(self, policy, buckets):
        principals = policy.principals

        if self.extend:
            principals = principals.copy()
            member_orgs = policy.principals.orgs_with_role(MEMBER)

            for key in buckets:
                mspid, role = key
                if principals.index_of(key) is None and mspid in member_orgs:
                    principals.add(Principal(mspid, role))

        return principals

    def select(self, peers, policy):
        """Picks the peers that satisfy the policy

        Arguments:
            peers {list} -- Pool of candidate peers, each one exposing
            get_mspid() and get_role()
            policy {Policy or dict} -- The endorsement policy

        Raises:
            PolicyUnsatisfiable -- If the peers cannot match the policy

        Returns:
            list -- Peers picked from the pool, grouped by principal index
        """
        if not isinstance(policy, Policy):
            policy = Policy.parse(policy)

        buckets = self.buckets(peers)
        principals = self.registry(policy, buckets)

        # a bucket is counted once, under the first principal with its key
        available = []
        for index, principal in enumerate(principals):
            key = principal.key()
            if principals.index_of(key) == index:
                available.append(len(buckets.get(key, [])))
            else:
                available.append(0)

        solver = Solver(principals.validator(), strategy=self.strategy)
        valid, required = solver.solve(policy.tree, available)

        if not valid:
            sizes = {key: len(bucket) for key, bucket in buckets.items()}
            logger.info(f"Peers cannot match policy - pool sizes {sizes}")
            raise PolicyUnsatisfiable(policy, sizes)

        selected = []
        for index, amount in enumerate(required):
            if amount:
                bucket = buckets[principals.get(index).key()]
                selected.extend(bucket[:amount])

        logger.info(f"Picked {len(selected)} out of {len(peers)} peers for policy")
        return selected


def pick_peers_for_policy(peers, policy, strategy=FIRST_FIT, extend=True):
    selector = PeerSelector(strategy=strategy, extend=extend)
    return selector.select(peers, policy)
