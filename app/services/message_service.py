from typing import List, Optional, Tuple

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, joinedload

from database.models import Message, User
from schemas.message_schema import MessageCreate
from utils.dependencies import Identity
from utils.exceptions import NotFoundError, ValidationFailedError
from utils.pagination import PageParams, paginate


class MessageService:
    def list_messages(
        self,
        db: Session,
        identity: Identity,
        params: PageParams,
        partner_id: Optional[int] = None,
    ) -> Tuple[List[Message], int]:
        """Messages the caller sent or received, optionally with one partner only."""
        if partner_id is not None:
            condition = or_(
                and_(Message.sender_id == identity.user_id, Message.receiver_id == partner_id),
                and_(Message.sender_id == partner_id, Message.receiver_id == identity.user_id),
            )
        else:
            condition = or_(
                Message.sender_id == identity.user_id,
                Message.receiver_id == identity.user_id,
            )

        query = (
            db.query(Message)
            .options(joinedload(Message.sender), joinedload(Message.receiver))
            .filter(condition)
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        return paginate(query, params)

    def send_message(self, db: Session, identity: Identity, message_in: MessageCreate) -> Message:
        if message_in.receiver_id == identity.user_id:
            raise ValidationFailedError("You cannot send a message to yourself")

        receiver = db.query(User).filter(User.id == message_in.receiver_id).first()
        if not receiver:
            raise NotFoundError("Receiver not found")

        message = Message(
            sender_id=identity.user_id,
            receiver_id=receiver.id,
            property_id=message_in.property_id,
            content=message_in.content,
        )
        db.add(message)
        db.commit()
        db.refresh(message)
        return message
