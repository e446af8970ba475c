import logging


logger = logging.getLogger(__name__)


MEMBER = "member"
ADMIN = "admin"


class MalformedPolicy(ValueError):
    pass


class Principal:
    def __init__(self, mspid, role=MEMBER):
        self.mspid = mspid
        self.role = role

    def key(self):
        return (self.mspid, self.role)

    def __eq__(self, other):
        if isinstance(other, Principal):
            return self.key() == other.key()
        return NotImplemented

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return f"Principal({self.mspid!r}, {self.role!r})"

    @classmethod
    def parse(cls, data):
        """Builds a principal out of an endorsement policy identity

        Arguments:
            data {dict} -- Identity in the form
            {"role": {"name": "member", "mspId": "Org1MSP"}}

        Raises:
            MalformedPolicy -- If the identity misses its role name or mspId

        Returns:
            Principal -- The parsed principal
        """
        role = data.get("role") if isinstance(data, dict) else None

        if not isinstance(role, dict):
            raise MalformedPolicy(f"Identity without role: {data}")

        name, mspid = role.get("name"), role.get("mspId")
        if not name or not mspid:
            raise MalformedPolicy(f"Identity role must have name and mspId: {data}")

        return cls(mspid, name)

    def dump(self):
        identity = {
            "role": {
                "name": self.role,
                "mspId": self.mspid,
            }
        }
        return identity


class Principals:
    """Ordered registry of the principals declared by a policy.

    A principal is referred to by its index in the registry, the same
    index used by the signed-by leaves of the policy tree.
    """

    def __init__(self, principals=None):
        self._principals = []

        for principal in principals or []:
            self.add(principal)

    def __len__(self):
        return len(self._principals)

    def __iter__(self):
        return iter(self._principals)

    def __repr__(self):
        return f"Principals({self._principals!r})"

    def add(self, principal):
        self._principals.append(principal)
        index = len(self._principals) - 1
        logger.debug(f"Principal {principal} registered at index {index}")
        return index

    def get(self, index):
        return self._principals[index]

    def index_of(self, key):
        for index, principal in enumerate(self._principals):
            if principal.key() == key:
                return index
        return None

    def orgs_with_role(self, role):
        orgs = []
        for principal in self._principals:
            if principal.role == role and principal.mspid not in orgs:
                orgs.append(principal.mspid)
        return orgs

    def copy(self):
        return Principals(self._principals)

    def compatible(self, candidate, required):
        """Checks if a signer of principal candidate can stand in
        for a policy requirement naming principal required

        A member requirement is met by any principal of the same
        organization, whatever its role. Any other role is only met
        by a principal with the same organization and role.

        Arguments:
            candidate {int} -- Index of the principal of the signer
            required {int} -- Index of the principal the policy requires

        Returns:
            bool -- True if the signer is accepted, False otherwise
        """
        if candidate == required:
            return True

        mine = self._principals[candidate]
        wanted = self._principals[required]
        if mine.key() == wanted.key():
            return True

        return mine.mspid == wanted.mspid and wanted.role == MEMBER

    def validator(self):
        return self.compatible

    @classmethod
    def parse(cls, identities):
        if not isinstance(identities, list):
            raise MalformedPolicy(f"Identities must be a list: {identities}")

        return cls([Principal.parse(identity) for identity in identities])

    def dump(self):
        return [principal.dump() for principal in self._principals]
