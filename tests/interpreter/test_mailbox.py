"""Unit tests for mailboxes and the mailbox directory."""

import pytest

from robowars.interpreter.mailbox import Mailbox, MailboxDirectory


@pytest.fixture
def mailbox():
    return Mailbox(capacity=3, owner_id="Batman")


class TestHasMessage:
    def test_empty_mailbox(self, mailbox):
        assert not mailbox.has_message("")
        assert not mailbox.has_message("Superman")

    def test_other_sender(self, mailbox):
        mailbox.add_message("Catwoman@Hi")
        assert not mailbox.has_message("")
        assert not mailbox.has_message("Superman")

    def test_matching_sender(self, mailbox):
        mailbox.add_message("Catwoman@Hi")
        mailbox.add_message("Superman@Heyo")
        assert mailbox.has_message("Superman")
        assert mailbox.has_message("superMAN")
        assert len(mailbox) == 2


class TestReceiveMessage:
    def test_empty_mailbox(self, mailbox):
        assert mailbox.receive_message("Superman") is None
        assert mailbox.receive_message("") is None

    def test_receive_removes_message(self, mailbox):
        mailbox.add_message("Aquaman@Glubglub")
        assert mailbox.receive_message("") is None
        assert mailbox.receive_message("Superman") is None
        assert mailbox.receive_message("Aquaman") == "Glubglub"
        assert mailbox.receive_message("Aquaman") is None
        assert mailbox.is_empty

    def test_fifo_per_sender(self, mailbox):
        mailbox.add_message("Superman@Super")
        mailbox.add_message("Aquaman@Splash")
        mailbox.add_message("Superman@Duper")
        assert mailbox.receive_message("Superman") == "Super"
        assert mailbox.receive_message("Superman") == "Duper"
        assert mailbox.messages == ["Aquaman@Splash"]

    def test_payload_may_contain_separator(self, mailbox):
        mailbox.add_message("Superman@a@b")
        assert mailbox.receive_message("superman") == "a@b"


class TestClear:
    def test_clear_drops_all_senders(self, mailbox):
        mailbox.add_message("Superman@Super")
        mailbox.add_message("Aquaman@Glubglub")
        mailbox.clear()
        assert mailbox.is_empty
        assert not mailbox.has_message("Superman")
        assert not mailbox.has_message("Aquaman")
        assert mailbox.is_open

    def test_close_clears_and_shuts(self, mailbox):
        mailbox.add_message("Superman@Super")
        mailbox.close()
        assert mailbox.is_empty
        assert not mailbox.is_open


class TestSendMessage:
    @pytest.fixture
    def directory(self, mailbox):
        directory = MailboxDirectory()
        directory.register(mailbox)
        return directory

    @pytest.fixture
    def robin(self, directory):
        return directory.create("Robin", capacity=3)

    @pytest.mark.parametrize(
        "recipient, payload",
        [("", ""), ("asdf", ""), ("", "asdf"), ("asdf", "hi"), ("Robin", "")],
    )
    def test_rejected_sends_deliver_nothing(self, mailbox, robin, recipient, payload):
        assert not mailbox.send_message(recipient, payload)
        assert robin.is_empty

    def test_send_without_directory(self):
        assert not Mailbox(3, "Alfred").send_message("Batman", "hi")

    def test_send_delivers_with_sender_prefix(self, mailbox, robin):
        assert mailbox.send_message("ROBIN", "hello")
        assert robin.messages == ["Batman@hello"]
        assert robin.receive_message("batman") == "hello"

    def test_full_mailbox_rejects(self, mailbox, robin):
        for i in range(3):
            assert mailbox.send_message("Robin", str(i))
        assert robin.is_full
        assert not mailbox.send_message("Robin", "overflow")
        assert len(robin) == 3

    def test_closed_mailbox_rejects(self, mailbox, robin, directory):
        mailbox.send_message("Robin", "early")
        directory.close("Robin")
        assert not robin.is_open
        assert robin.is_empty
        assert not mailbox.send_message("Robin", "late")


class TestMailboxDirectory:
    def test_register_and_lookup(self):
        directory = MailboxDirectory()
        box = directory.create("red0", capacity=6)
        assert directory.get("RED0") is box
        assert box.directory is directory
        assert list(directory) == [box]

    @pytest.mark.parametrize("owner", ["", "bad@id"])
    def test_rejects_invalid_ids(self, owner):
        with pytest.raises(ValueError):
            MailboxDirectory().create(owner, capacity=6)

    def test_rejects_case_insensitive_duplicates(self):
        directory = MailboxDirectory()
        directory.create("red0", capacity=6)
        with pytest.raises(ValueError):
            directory.create("Red0", capacity=6)

    def test_close_unknown(self):
        with pytest.raises(KeyError):
            MailboxDirectory().close("nobody")

    def test_contains(self):
        directory = MailboxDirectory()
        directory.create("red0", capacity=6)
        assert "Red0" in directory
        assert "blue0" not in directory
        assert 5 not in directory
