from flask import jsonify, request

from app.modules.comments import comments_bp
from app.modules.comments.forms import (
    CommentFilterForm,
    CommentForm,
    CommentVisibilityForm,
    ReplyFilterForm,
    ReplyForm,
    ReplyVisibilityForm,
)
from app.modules.comments.services import CommentService

comment_service = CommentService()


@comments_bp.route("/add_comment", methods=["POST"])
def add_comment():
    form = CommentForm().validate_or_raise()
    saved = comment_service.add_comment(
        id_dataset=form.id_dataset.data,
        user_name=form.user_name.data,
        comment=form.comment.data,
        visible=form.visible.data,
    )
    return jsonify(saved.to_dict())


@comments_bp.route("/get_all_comments_by_dataset", methods=["GET"])
def get_all_comments_by_dataset():
    form = CommentFilterForm(request.args).validate_or_raise()
    comments = comment_service.get_all_comments_by_dataset(form.id_dataset.data, visible=form.visible.data)
    return jsonify([c.to_dict() for c in comments])


@comments_bp.route("/get_all_comments", methods=["GET"])
def get_all_comments():
    comments = comment_service.get_all_comments()
    return jsonify([c.to_dict() for c in comments])


@comments_bp.route("/update_comment_visibility", methods=["PUT"])
def update_comment_visibility():
    form = CommentVisibilityForm().validate_or_raise()
    result = comment_service.update_comment_visibility(form.id_dataset.data, form.id_comment.data, form.visible.data)
    return jsonify(result)


# ---------- REPLIES ----------


@comments_bp.route("/reply_comment", methods=["POST"])
def reply_comment():
    form = ReplyForm().validate_or_raise()
    saved = comment_service.reply_comment(
        id_comment=form.id_comment.data,
        username=form.username.data,
        reply=form.reply.data,
        visible=form.visible.data,
    )
    return jsonify(saved.to_dict())


@comments_bp.route("/get_comment_replies", methods=["GET"])
def get_comment_replies():
    form = ReplyFilterForm(request.args).validate_or_raise()
    replies = comment_service.get_comment_replies(form.id_comment.data, visible=form.visible.data)
    return jsonify([r.to_dict() for r in replies])


@comments_bp.route("/update_reply_visibility", methods=["PUT"])
def update_reply_visibility():
    form = ReplyVisibilityForm().validate_or_raise()
    result = comment_service.update_reply_visibility(form.id_comment.data, form.reply_id.data, form.visible.data)
    return jsonify(result)
