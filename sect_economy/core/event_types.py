"""이벤트 유형 상수

모든 payload 에는 player_id 가 포함된다.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # Notifier → NotificationLog
    NOTIFICATION = "notification"

    # player_service
    PLAYER_REGISTERED = "player_registered"

    # === Quest events (quest_service) ===
    QUESTS_GENERATED = "quests_generated"
    QUEST_PROGRESSED = "quest_progressed"
    QUEST_COMPLETED = "quest_completed"
    QUEST_CLAIMED = "quest_claimed"
    QUEST_REPLENISHED = "quest_replenished"
    QUEST_REFRESH_SCHEDULED = "quest_refresh_scheduled"

    # === Shop events (shop_service) ===
    SHOP_RESTOCKED = "shop_restocked"
    ITEM_PURCHASED = "item_purchased"
    PURCHASE_REJECTED = "purchase_rejected"
