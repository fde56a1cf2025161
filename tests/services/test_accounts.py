import pytest
import sqlite3
from dataclasses import replace

from models.account import Account
from models.uri import EMPTY_URI
from provider.contract import UNKNOWN_ACCOUNT_TYPE


class TestAccountService:
    """Tests for AccountService."""

    def test_create_account(self, services, full_account):
        """Test storing an account and reading it back."""
        stored = services.accounts.create(full_account)

        # The store has no type column
        assert stored == replace(full_account, type=UNKNOWN_ACCOUNT_TYPE)

    def test_create_minimal_account(self, services):
        """Test storing an account with no URIs or settings."""
        stored = services.accounts.create(Account("alice@example.com", "com.example"))

        assert stored.name == "alice@example.com"
        assert stored.folder_list_uri is EMPTY_URI
        assert stored.settings is None

    def test_find_by_name(self, services, full_account):
        """Test finding an account by name."""
        services.accounts.create(full_account)

        found = services.accounts.find_by_name("bob@example.com")

        assert found is not None
        assert found.uri == full_account.uri
        assert found.settings == full_account.settings

    def test_find_by_name_not_found(self, services):
        """Test finding a non-existent account by name returns None."""
        assert services.accounts.find_by_name("nonexistent") is None

    def test_find_by_name_case_sensitive(self, services):
        """Test that account name lookup is case-sensitive."""
        services.accounts.create(Account("test_account", "com.example"))

        assert services.accounts.find_by_name("Test_Account") is None

    def test_find_all_empty(self, services):
        """Test finding all accounts when the store is empty."""
        accounts = services.accounts.find_all()

        assert accounts == []
        assert isinstance(accounts, list)

    def test_find_all_returns_insertion_order(self, services):
        """Test that find_all returns accounts in the order they were stored."""
        for name in ("zebra", "alpha", "beta"):
            services.accounts.create(Account(name, "com.example"))

        accounts = services.accounts.find_all()

        assert [a.name for a in accounts] == ["zebra", "alpha", "beta"]

    def test_create_duplicate_name_raises_error(self, services):
        """Test that storing two accounts with the same name raises an error."""
        services.accounts.create(Account("duplicate", "com.example"))

        with pytest.raises(sqlite3.IntegrityError):
            services.accounts.create(Account("duplicate", "com.other"))

    def test_delete_account(self, services, full_account):
        """Test deleting an account."""
        services.accounts.create(full_account)

        assert services.accounts.delete(full_account.name) is True
        assert services.accounts.find_by_name(full_account.name) is None

    def test_delete_nonexistent_account(self, services):
        """Test deleting a non-existent account returns False."""
        assert services.accounts.delete("nobody") is False

    def test_delete_does_not_affect_other_accounts(self, services):
        """Test that deleting one account doesn't affect others."""
        for name in ("keep1", "delete_me", "keep2"):
            services.accounts.create(Account(name, "com.example"))

        services.accounts.delete("delete_me")

        assert [a.name for a in services.accounts.find_all()] == ["keep1", "keep2"]

    def test_stored_account_survives_text_form(self, services, full_account):
        """Test that a stored account can be exported and imported again."""
        stored = services.accounts.create(full_account)

        assert Account.new_instance(stored.serialize()) == stored
