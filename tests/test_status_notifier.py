"""
Status notifier behaviour
"""

from campus_registry.models.view import StatusKind


class TestStatusNotifier:

    def test_message_is_visible_until_timeout(self, notifier, clock):
        notifier.success("Student created successfully")

        clock.advance(2.9)
        current = notifier.current
        assert current is not None
        assert current.kind == StatusKind.SUCCESS
        assert current.text == "Student created successfully"

        clock.advance(0.1)
        assert notifier.current is None

    def test_new_message_replaces_current(self, notifier, clock):
        notifier.error("Error: boom")
        clock.advance(2)
        notifier.info("Editing student S1")

        current = notifier.current
        assert current.kind == StatusKind.INFO
        assert current.text == "Editing student S1"

        # the replacement gets its own full lifetime
        clock.advance(2)
        assert notifier.current is not None
        clock.advance(1)
        assert notifier.current is None

    def test_expires_in_counts_down(self, notifier, clock):
        notifier.info("hello")
        clock.advance(1)

        assert notifier.current.expires_in == 2.0

    def test_dismiss_clears_message(self, notifier):
        notifier.error("Error: boom")
        notifier.dismiss()

        assert notifier.current is None

    def test_nothing_shown_initially(self, notifier):
        assert notifier.current is None
