"""
RabbitMQ Event Publisher
"""
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict

import pika

from storefront.config import settings

logger = logging.getLogger(__name__)

ORDER_PLACED_ROUTING_KEY = "order.placed"
USER_REGISTERED_ROUTING_KEY = "user.registered"


class EventPublisher:
    """Publisher for sending domain events to RabbitMQ"""

    def __init__(self):
        self.rabbitmq_url = settings.RABBITMQ_URL
        self.exchange = settings.RABBITMQ_EXCHANGE
        self.enabled = settings.EVENTS_ENABLED

    def publish_order_placed(self, order_data: Dict) -> bool:
        """
        Publish OrderPlaced event

        Args:
            order_data: Order header and items

        Returns:
            True if published successfully, False otherwise
        """
        return self._publish("OrderPlaced", ORDER_PLACED_ROUTING_KEY, order_data)

    def publish_user_registered(self, user_data: Dict) -> bool:
        """
        Publish UserRegistered event

        The payload carries the activation token so a mailer can send the
        welcome email.

        Args:
            user_data: user_id, email, first_name and activation_token

        Returns:
            True if published successfully, False otherwise
        """
        return self._publish("UserRegistered", USER_REGISTERED_ROUTING_KEY, user_data)

    def _publish(self, event_type: str, routing_key: str, data: Dict) -> bool:
        if not self.enabled:
            logger.debug("Events disabled, dropping %s", event_type)
            return False

        event = {
            "event_type": event_type,
            "event_id": str(uuid.uuid4()),
            "event_version": "1.0",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": settings.SERVICE_NAME,
            "data": data
        }

        try:
            connection = pika.BlockingConnection(
                pika.URLParameters(self.rabbitmq_url)
            )
            try:
                channel = connection.channel()

                channel.exchange_declare(
                    exchange=self.exchange,
                    exchange_type='topic',
                    durable=True
                )

                # Enable publisher confirms
                channel.confirm_delivery()

                channel.basic_publish(
                    exchange=self.exchange,
                    routing_key=routing_key,
                    body=json.dumps(event, default=str),
                    properties=pika.BasicProperties(
                        delivery_mode=2,  # Persistent message
                        content_type='application/json',
                        correlation_id=event["event_id"]
                    ),
                    mandatory=False
                )
            finally:
                connection.close()

            logger.info("Event published: %s (ID: %s)", event_type, event["event_id"])
            return True

        except Exception as e:
            logger.warning("Failed to publish %s event: %s", event_type, e)
            return False
