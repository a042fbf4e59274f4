"""Behavioural tests for the in-memory token, activity, media and reaction repositories."""

import pytest

from aroma.domain.entities import (
    AuthenticationToken,
    Event,
    Image,
    Reaction,
    ReactionAction,
    ReactionMatcher,
    User,
)
from aroma.domain.value_objects import (
    ActionKind,
    Dimension,
    EventType,
    ImageType,
    LengthOfTime,
    MatcherKind,
    TimeUnit,
)
from aroma.infrastructure.memory import (
    InMemoryActivityRepository,
    InMemoryMediaRepository,
    InMemoryReactionRepository,
    InMemoryTokenRepository,
)
from aroma.ports.exceptions import (
    EventDoesNotExistError,
    InvalidArgumentError,
    InvalidCredentialsError,
    MediaDoesNotExistError,
)
from tests.unit.ids import (
    APP_ID,
    EVENT_ID,
    MEDIA_ID,
    OWNER_ID,
    SECOND_TOKEN_ID,
    SECOND_USER_ID,
    START_MILLIS,
    TOKEN_ID,
    USER_ID,
)


class TestTokens:
    """Tests for InMemoryTokenRepository."""

    @pytest.fixture
    def tokens(self, defaults, clock):
        return InMemoryTokenRepository(defaults=defaults, clock=clock)

    def test_token_disappears_at_expiration(self, tokens, clock):
        tokens.save_token(
            AuthenticationToken(
                token_id=TOKEN_ID, owner_id=OWNER_ID, time_of_expiration=START_MILLIS + 5_000
            )
        )

        clock.advance(4)
        assert tokens.contains_token(TOKEN_ID) is True

        clock.advance(1)
        assert tokens.contains_token(TOKEN_ID) is False
        with pytest.raises(InvalidCredentialsError):
            tokens.get_token(TOKEN_ID)

    def test_expired_token_rejected(self, tokens):
        with pytest.raises(InvalidArgumentError):
            tokens.save_token(
                AuthenticationToken(
                    token_id=TOKEN_ID, owner_id=OWNER_ID, time_of_expiration=START_MILLIS - 1
                )
            )

    def test_owner_listing_and_bulk_delete(self, tokens):
        tokens.save_token(AuthenticationToken(token_id=TOKEN_ID, owner_id=OWNER_ID))
        tokens.save_token(AuthenticationToken(token_id=SECOND_TOKEN_ID, owner_id=OWNER_ID))

        assert len(tokens.get_tokens_belonging_to(OWNER_ID)) == 2
        assert tokens.does_token_belong_to(TOKEN_ID, OWNER_ID) is True

        tokens.delete_tokens(OWNER_ID)

        assert tokens.get_tokens_belonging_to(OWNER_ID) == []

    def test_resave_with_new_owner_moves_token(self, tokens):
        """The previous owner neither lists nor bulk-deletes a moved token."""
        tokens.save_token(AuthenticationToken(token_id=TOKEN_ID, owner_id=OWNER_ID))
        tokens.save_token(AuthenticationToken(token_id=TOKEN_ID, owner_id=SECOND_USER_ID))

        assert tokens.get_tokens_belonging_to(OWNER_ID) == []

        tokens.delete_tokens(OWNER_ID)
        assert tokens.contains_token(TOKEN_ID) is True
        assert tokens.does_token_belong_to(TOKEN_ID, SECOND_USER_ID) is True

    def test_delete_missing_token_raises(self, tokens):
        with pytest.raises(InvalidCredentialsError):
            tokens.delete_token(TOKEN_ID)


class TestActivity:
    """Tests for InMemoryActivityRepository."""

    @pytest.fixture
    def activity(self, defaults, clock):
        return InMemoryActivityRepository(defaults=defaults, clock=clock)

    @pytest.fixture
    def event(self):
        return Event(event_id=EVENT_ID, event_type=EventType.APPLICATION_CREATED)

    def test_event_delivered_to_every_recipient(self, activity, event):
        activity.save_events(event, [User(user_id=USER_ID), User(user_id=SECOND_USER_ID)])

        assert activity.get_event(EVENT_ID, USER_ID) == event
        assert activity.get_all_events_for(SECOND_USER_ID) == [event]

    def test_event_expires(self, activity, event, clock):
        activity.save_event(event, User(user_id=USER_ID), LengthOfTime(1, TimeUnit.MINUTES))

        clock.advance(60)

        assert activity.contains_event(EVENT_ID, USER_ID) is False

    def test_delete_missing_event_raises(self, activity):
        with pytest.raises(EventDoesNotExistError):
            activity.delete_event(EVENT_ID, USER_ID)

    def test_delete_all_events(self, activity, event):
        activity.save_event(event, User(user_id=USER_ID))

        activity.delete_all_events_for(USER_ID)

        assert activity.get_all_events_for(USER_ID) == []


class TestMedia:
    """Tests for InMemoryMediaRepository."""

    @pytest.fixture
    def media(self, defaults, clock):
        return InMemoryMediaRepository(defaults=defaults, clock=clock)

    def test_thumbnails_keyed_by_dimension(self, media):
        media.save_media(MEDIA_ID, Image(ImageType.PNG, b"full"))
        media.save_thumbnail(MEDIA_ID, Dimension(32, 32), Image(ImageType.PNG, b"small"))

        thumbnail = media.get_thumbnail(MEDIA_ID, Dimension(32, 32))

        assert thumbnail.data == b"small"
        assert thumbnail.dimension == Dimension(32, 32)
        assert media.contains_thumbnail(MEDIA_ID, Dimension(64, 64)) is False

    def test_delete_media_removes_thumbnails(self, media):
        media.save_media(MEDIA_ID, Image(ImageType.PNG, b"full"))
        media.save_thumbnail(MEDIA_ID, Dimension(32, 32), Image(ImageType.PNG, b"small"))

        media.delete_media(MEDIA_ID)

        assert media.contains_media(MEDIA_ID) is False
        assert media.contains_thumbnail(MEDIA_ID, Dimension(32, 32)) is False

    def test_size_bounds_enforced(self, media, defaults):
        with pytest.raises(InvalidArgumentError):
            media.save_media(
                MEDIA_ID, Image(ImageType.PNG, b"x" * (defaults.max_media_size_bytes + 1))
            )

    def test_missing_media_raises(self, media):
        with pytest.raises(MediaDoesNotExistError):
            media.get_media(MEDIA_ID)
        with pytest.raises(MediaDoesNotExistError):
            media.delete_thumbnail(MEDIA_ID, Dimension(32, 32))


class TestReactions:
    """Tests for InMemoryReactionRepository."""

    @pytest.fixture
    def reactions(self, defaults, clock):
        return InMemoryReactionRepository(defaults=defaults, clock=clock)

    def test_user_and_application_lists_are_separate(self, reactions):
        reaction = Reaction(
            name="quiet",
            matchers=[ReactionMatcher(MatcherKind.URGENCY_EQUALS, "LOW")],
            actions=[ReactionAction(ActionKind.SKIP_INBOX)],
        )

        reactions.save_reactions_for_user(USER_ID, [reaction])

        assert reactions.get_reactions_for_user(USER_ID) == [reaction]
        assert reactions.get_reactions_for_application(APP_ID) == []

    def test_saving_empty_clears(self, reactions):
        reactions.save_reactions_for_application(APP_ID, [Reaction(name="r")])

        reactions.save_reactions_for_application(APP_ID, None)

        assert reactions.get_reactions_for_application(APP_ID) == []
