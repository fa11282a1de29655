"""
DynamoDB service for quiz progress tracking.
Stores one item per quiz attempt, keyed by user_id and timestamp.
"""
import time
import boto3
from typing import Any, Optional
from app.core.config import settings
from app.core.logging_config import logger
from app.models.progress_schemas import (
    QuizAttempt,
    ProgressSummary,
    ProgressSaveRequest
)


class ProgressService:
    """Service for recording and summarising quiz attempts in DynamoDB."""

    def __init__(self, table: Optional[Any] = None):
        """
        Initialize DynamoDB table access.

        Args:
            table: Optional pre-built table object (boto3 Table or a stand-in)
        """
        self.table_name = settings.dynamodb_table_name
        self.retention_days = settings.progress_retention_days
        self.query_limit = settings.progress_query_limit
        self.table = table

        if self.table is None and settings.progress_tracking_enabled:
            try:
                dynamodb = boto3.resource(
                    'dynamodb',
                    region_name=settings.aws_region,
                    aws_access_key_id=settings.aws_access_key_id,
                    aws_secret_access_key=settings.aws_secret_access_key
                )
                self.table = dynamodb.Table(self.table_name)
                logger.info(f"[ProgressService] Initialized DynamoDB client for table: {self.table_name}")
            except Exception as e:
                logger.error(f"[ProgressService] Failed to initialize DynamoDB client: {e}")
                self.table = None

    @property
    def enabled(self) -> bool:
        return self.table is not None

    def calculate_ttl(self) -> int:
        """Unix timestamp after which DynamoDB may delete the item."""
        return int(time.time()) + (self.retention_days * 24 * 60 * 60)

    def build_save_request(
        self,
        user_id: str,
        session_id: str,
        topic_index: int,
        topic_name: str,
        score: int,
        total: int,
        percentage: int
    ) -> ProgressSaveRequest:
        return ProgressSaveRequest(
            user_id=user_id,
            timestamp=int(time.time() * 1000),
            session_id=session_id,
            topic_index=topic_index,
            topic_name=topic_name,
            score=score,
            total=total,
            percentage=percentage,
            ttl=self.calculate_ttl()
        )

    async def save_attempt(self, request: ProgressSaveRequest) -> bool:
        """
        Save a quiz attempt to DynamoDB.

        Args:
            request: ProgressSaveRequest with attempt details

        Returns:
            True if saved successfully, False otherwise
        """
        if not self.table:
            logger.warning("[ProgressService] DynamoDB not initialized, skipping save")
            return False

        try:
            self.table.put_item(Item=request.model_dump())
            logger.info(f"[ProgressService] Saved attempt for {request.user_id} on '{request.topic_name}'")
            return True

        except Exception as e:
            logger.error(f"[ProgressService] Error saving attempt: {e}")
            return False

    async def get_progress(self, user_id: str, limit: Optional[int] = None) -> ProgressSummary:
        """
        Retrieve recent quiz attempts and summary for a user.

        Args:
            user_id: User identifier
            limit: Maximum number of attempts to read (default: from config)

        Returns:
            ProgressSummary, empty when tracking is off or the read fails
        """
        if not self.table:
            logger.warning("[ProgressService] DynamoDB not initialized, returning empty progress")
            return ProgressSummary(user_id=user_id)

        try:
            response = self.table.query(
                KeyConditionExpression='user_id = :uid',
                ExpressionAttributeValues={':uid': user_id},
                ScanIndexForward=False,  # Newest first
                Limit=limit or self.query_limit
            )

            attempts = [
                QuizAttempt(
                    timestamp=int(item['timestamp']),
                    session_id=item['session_id'],
                    topic_index=int(item['topic_index']),
                    topic_name=item['topic_name'],
                    score=int(item['score']),
                    total=int(item['total']),
                    percentage=int(item['percentage'])
                )
                for item in response.get('Items', [])
            ]

            logger.info(f"[ProgressService] Retrieved {len(attempts)} attempts for {user_id}")

            if not attempts:
                return ProgressSummary(user_id=user_id)

            return ProgressSummary(
                user_id=user_id,
                attempts=attempts,
                total_progress=sum(attempt.percentage for attempt in attempts) / len(attempts),
                topics_studied=len({attempt.topic_name for attempt in attempts}),
                last_activity=attempts[0].timestamp
            )

        except Exception as e:
            logger.error(f"[ProgressService] Error retrieving progress: {e}")
            return ProgressSummary(user_id=user_id)


# Global progress service instance
progress_service = ProgressService()
