import unittest
import logging

from endorser.design.identities import (
    Principal,
    Principals,
    MalformedPolicy,
    MEMBER,
    ADMIN,
)


class TestPrincipals(unittest.TestCase):
    def registry(self):
        principals = Principals(
            [
                Principal("orgA", MEMBER),
                Principal("orgA", ADMIN),
                Principal("orgB", MEMBER),
                Principal("orgB", ADMIN),
            ]
        )
        return principals

    def test_principal_parse_dump(self):
        data = {"role": {"name": "admin", "mspId": "Org1MSP"}}
        principal = Principal.parse(data)
        assert principal.mspid == "Org1MSP"
        assert principal.role == ADMIN
        assert principal.key() == ("Org1MSP", "admin")
        assert principal.dump() == data

    def test_principal_parse_malformed(self):
        with self.assertRaises(MalformedPolicy):
            Principal.parse({"role": {"name": "member"}})

        with self.assertRaises(MalformedPolicy):
            Principal.parse({"role": {"mspId": "Org1MSP"}})

        with self.assertRaises(MalformedPolicy):
            Principal.parse({"name": "member", "mspId": "Org1MSP"})

        with self.assertRaises(MalformedPolicy):
            Principals.parse({"role": {"name": "member", "mspId": "Org1MSP"}})

    def test_registry_order_and_lookup(self):
        principals = self.registry()
        assert len(principals) == 4
        assert principals.get(2) == Principal("orgB", MEMBER)
        assert principals.index_of(("orgB", ADMIN)) == 3
        assert principals.index_of(("orgC", MEMBER)) is None
        assert principals.orgs_with_role(MEMBER) == ["orgA", "orgB"]

        index = principals.add(Principal("orgC", "peer"))
        assert index == 4
        assert principals.index_of(("orgC", "peer")) == 4

    def test_registry_copy_is_independent(self):
        principals = self.registry()
        extended = principals.copy()
        extended.add(Principal("orgC", MEMBER))
        assert len(principals) == 4
        assert len(extended) == 5

    def test_compatible_identity(self):
        principals = self.registry()
        for index in range(len(principals)):
            assert principals.compatible(index, index)

    def test_compatible_member_requirement(self):
        principals = self.registry()
        # any principal of orgA stands in for the orgA member
        assert principals.compatible(1, 0)
        # a different organization never does
        assert not principals.compatible(2, 0)
        assert not principals.compatible(3, 0)

    def test_compatible_admin_requirement(self):
        principals = self.registry()
        assert not principals.compatible(0, 1)
        assert not principals.compatible(3, 1)
        assert not principals.compatible(2, 3)

    def test_compatible_identical_principals(self):
        principals = Principals(
            [Principal("orgA", ADMIN), Principal("orgA", ADMIN), Principal("orgA", "peer")]
        )
        assert principals.compatible(0, 1)
        assert principals.compatible(1, 0)
        assert not principals.compatible(2, 1)

    def test_validator_is_bound(self):
        principals = self.registry()
        validate = principals.validator()
        assert validate(1, 0)
        assert not validate(0, 1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    unittest.main()
