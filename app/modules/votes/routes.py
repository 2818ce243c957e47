from flask import jsonify, request

from app.modules.votes import votes_bp
from app.modules.votes.forms import VoteForm, VotesByDatasetForm, VotesByUserForm
from app.modules.votes.services import VoteService

vote_service = VoteService()


@votes_bp.route("/add_dataset_vote", methods=["POST"])
def add_dataset_vote():
    form = VoteForm().validate_or_raise()
    result = vote_service.add_dataset_vote(
        dataset_id=form.dataset_id.data,
        user_id=form.user_id.data,
        dataset_name=form.dataset_name.data,
        dataset_description=form.dataset_description.data or None,
        user_name=form.user_name.data,
        calification=form.calification.data,
    )
    return jsonify(result)


@votes_bp.route("/get_votes_by_dataset", methods=["GET"])
def get_votes_by_dataset():
    form = VotesByDatasetForm(request.args).validate_or_raise()
    return jsonify(vote_service.get_votes_by_dataset(form.dataset_id.data))


@votes_bp.route("/get_votes_by_user", methods=["GET"])
def get_votes_by_user():
    form = VotesByUserForm(request.args).validate_or_raise()
    return jsonify(vote_service.get_votes_by_user(form.user_id.data))


@votes_bp.route("/get_dataset_rating", methods=["GET"])
def get_dataset_rating():
    form = VotesByDatasetForm(request.args).validate_or_raise()
    return jsonify(vote_service.get_dataset_rating(form.dataset_id.data))
