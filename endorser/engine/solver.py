import logging

from endorser.design.identities import MalformedPolicy
from endorser.design.policy import Leaf


logger = logging.getLogger(__name__)


FIRST_FIT = "first-fit"
BACKTRACK = "backtrack"
STRATEGIES = (FIRST_FIT, BACKTRACK)


class Unsatisfiable(Exception):
    pass


class Solver:
    """Matches a policy tree against the amount of signers available
    for each principal.

    The first-fit strategy walks the tree once, children in listed order,
    and never revisits a choice: a policy that is satisfiable under another
    consumption order can still be rejected. The backtrack strategy keeps
    the first-fit answer whenever there is one and otherwise searches every
    assignment.
    """

    def __init__(self, compatible, strategy=FIRST_FIT):
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown solver strategy {strategy}")

        self.compatible = compatible
        self.strategy = strategy

    def evaluate(self, node, available):
        """Evaluates node consuming signers from available (mutated in place)

        Signers consumed by children that succeeded are kept even when
        the node as a whole fails, so available must be discarded after
        a failed evaluation.

        Arguments:
            node {Leaf or Threshold} -- The policy node
            available {list} -- Unconsumed signers per principal index

        Returns:
            bool -- True if the node is satisfied, False otherwise
        """
        if isinstance(node, Leaf):
            return self._evaluate_leaf(node, available)

        needed = node.required
        left = len(node.children)

        for child in node.children:
            if needed == 0:
                break

            if self.evaluate(child, available):
                needed -= 1
            left -= 1

            if left < needed:
                return False

        return needed == 0

    def _evaluate_leaf(self, leaf, available):
        for index, amount in enumerate(available):
            if amount > 0 and self.compatible(index, leaf.principal):
                available[index] -= 1
                return True
        return False

    def _outcomes(self, node, available):
        if isinstance(node, Leaf):
            for index, amount in enumerate(available):
                if amount > 0 and self.compatible(index, node.principal):
                    yield available[:index] + (amount - 1,) + available[index + 1 :]
        else:
            yield from self._gate(node.children, 0, node.required, available)

    def _gate(self, children, position, needed, available):
        if needed == 0:
            yield available
            return

        if len(children) - position < needed:
            return

        seen = set()
        for state in self._outcomes(children[position], available):
            if state in seen:
                continue
            seen.add(state)
            yield from self._gate(children, position + 1, needed - 1, state)

        yield from self._gate(children, position + 1, needed, available)

    def _search(self, tree, available):
        for state in self._outcomes(tree, tuple(available)):
            return list(state)
        return None

    def solve(self, tree, available):
        """Checks if the available signers satisfy the policy tree

        Arguments:
            tree {Leaf or Threshold} -- Root node of the policy
            available {list} -- Amount of signers per principal index,
            left untouched

        Raises:
            MalformedPolicy -- If a leaf refers to an index outside available

        Returns:
            tuple -- (True, required) where required holds the amount of
            signers taken from each principal index, or (False, None)
        """
        for leaf in tree.leaves():
            if leaf.principal >= len(available):
                raise MalformedPolicy(
                    f"signed-by {leaf.principal} refers to an unknown principal "
                    f"(available {len(available)})"
                )

        remaining = list(available)
        valid = self.evaluate(tree, remaining)

        if not valid and self.strategy == BACKTRACK:
            logger.debug("First-fit failed, searching all assignments")
            remaining = self._search(tree, available)
            valid = remaining is not None

        if not valid:
            logger.debug(f"Policy tree not satisfied by available {list(available)}")
            return False, None

        required = [
            original - left for original, left in zip(available, remaining)
        ]
        logger.debug(
            f"Policy tree satisfied ({self.strategy}): "
            f"available {list(available)} - required {required}"
        )
        return True, required

    def require(self, tree, available):
        valid, required = self.solve(tree, available)
        if not valid:
            raise Unsatisfiable("Policy cannot be satisfied by supplied signers")
        return required
