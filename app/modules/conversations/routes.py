from flask import jsonify, request

from app.modules.conversations import conversations_bp
from app.modules.conversations.forms import (
    ConversationForm,
    MessageForm,
    StartConversationForm,
    UserConversationsForm,
)
from app.modules.conversations.services import ConversationService

conversation_service = ConversationService()


@conversations_bp.route("/start_conversation", methods=["POST"])
def start_conversation():
    form = StartConversationForm().validate_or_raise()

    existing = conversation_service.conversation_exists(form.id_user_one.data, form.id_user_two.data)
    if existing["exists"]:
        return (
            jsonify({"message": "Conversation already exists", "id_conversation": existing["id_conversation"]}),
            200,
        )

    result = conversation_service.start_conversation(
        id_user_one=form.id_user_one.data,
        id_user_two=form.id_user_two.data,
        user_one_name=form.user_one_name.data,
        user_two_name=form.user_two_name.data,
    )
    return jsonify(result)


@conversations_bp.route("/get_user_conversations", methods=["GET"])
def get_user_conversations():
    form = UserConversationsForm(request.args).validate_or_raise()
    conversations = conversation_service.get_user_conversations(form.id_user.data)
    return jsonify([c.to_dict() for c in conversations])


@conversations_bp.route("/send_message", methods=["POST"])
def send_message():
    form = MessageForm().validate_or_raise()
    sent = conversation_service.send_message(form.id_conversation.data, form.id_user.data, form.message.data)
    return jsonify(sent.to_dict())


@conversations_bp.route("/get_conversation_messages", methods=["GET"])
def get_conversation_messages():
    form = ConversationForm(request.args).validate_or_raise()
    messages = conversation_service.get_conversation_messages(form.id_conversation.data)
    return jsonify([m.to_dict() for m in messages])


@conversations_bp.route("/get_latest_message", methods=["GET"])
def get_latest_message():
    form = ConversationForm(request.args).validate_or_raise()
    latest = conversation_service.get_latest_message(form.id_conversation.data)
    if latest is None:
        return jsonify({"has_messages": False, "message": None})
    return jsonify({"has_messages": True, "message": latest.to_dict()})
