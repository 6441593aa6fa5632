"""Tests for publication handoff tokens."""
from portfolio.handoff import HandoffCodec, READER_SLOT, REQUEST_SLOT


class TestHandoffCodec:
    def test_carries_publication(self, publications):
        codec = HandoffCodec("test-secret")
        restored = codec.loads(codec.dumps(publications[0]))

        assert restored == publications[0]

    def test_missing_token(self):
        assert HandoffCodec("test-secret").loads(None) is None
        assert HandoffCodec("test-secret").loads("") is None

    def test_tampered_token(self, publications):
        codec = HandoffCodec("test-secret")
        token = codec.dumps(publications[0])

        assert codec.loads(token[:-2] + "xx") is None

    def test_other_secret(self, publications):
        token = HandoffCodec("one-secret").dumps(publications[0])
        assert HandoffCodec("other-secret").loads(token) is None

    def test_slots_do_not_mix(self, publications):
        """A reader token cannot be replayed as a request token."""
        token = HandoffCodec("test-secret", slot=READER_SLOT).dumps(publications[0])
        assert HandoffCodec("test-secret", slot=REQUEST_SLOT).loads(token) is None

    def test_expired_token(self, publications):
        token = HandoffCodec("test-secret").dumps(publications[0])
        assert HandoffCodec("test-secret", max_age=-1).loads(token) is None
