TOURNAMENT_STATUS_UPCOMING = "upcoming"
TOURNAMENT_STATUS_ACTIVE = "active"
TOURNAMENT_STATUS_COMPLETED = "completed"
TOURNAMENT_STATUS_CANCELLED = "cancelled"

TOURNAMENT_STATUSES = frozenset(
    {
        TOURNAMENT_STATUS_UPCOMING,
        TOURNAMENT_STATUS_ACTIVE,
        TOURNAMENT_STATUS_COMPLETED,
        TOURNAMENT_STATUS_CANCELLED,
    }
)
TOURNAMENT_TERMINAL_STATUSES = frozenset(
    {
        TOURNAMENT_STATUS_COMPLETED,
        TOURNAMENT_STATUS_CANCELLED,
    }
)

TOURNAMENT_OPERATION_JOIN = "join"
TOURNAMENT_OPERATION_SUBMIT = "submit"
TOURNAMENT_OPERATION_VIEW = "view"

TOURNAMENT_INVITE_CODE_ATTEMPTS = 10

EVENT_PARTICIPANT_JOINED = "participant-joined"
EVENT_PARTICIPANT_FINISHED = "participant-finished"
EVENT_PLAYER_ANSWERED = "player-answered"
