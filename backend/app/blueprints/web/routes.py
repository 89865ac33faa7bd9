from flask import Blueprint, render_template, request, current_app, redirect, url_for

from backend.app.services.registration.form_controller import FormController
from backend.app.services.registration.validation import GRADE_OPTIONS, LANGUAGE_OPTIONS

web_bp = Blueprint('web', __name__)


def _build_controller():
    return FormController(
        endpoint=current_app.config['REGISTRATION_RELAY_URL'],
        timeout=current_app.config.get('REGISTRATION_RELAY_TIMEOUT_SECONDS', 15),
        session=current_app.extensions.get('registration_client_session'),
    )


def _render(controller, status_code=200):
    return render_template(
        'auth/register.html',
        form=controller.data,
        errors=controller.errors,
        phase=controller.phase.value,
        message=controller.message,
        grades=GRADE_OPTIONS,
        languages=LANGUAGE_OPTIONS,
    ), status_code


@web_bp.route('/')
def index():
    return redirect(url_for('web.register_page'), code=302)


@web_bp.route('/register', methods=['GET', 'POST'])
def register_page():
    """Render the registration form; on POST submit it through the relay."""
    controller = _build_controller()
    if request.method == 'GET':
        return _render(controller)

    controller.load(request.form.to_dict(flat=True))
    controller.submit()
    return _render(controller)
