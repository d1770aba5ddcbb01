"""
Site Routes
"""

from flask import current_app, send_from_directory

from catalog.site import site_bp


@site_bp.route('/')
def index():
    """Static landing document"""
    return send_from_directory(current_app.static_folder, 'index.html')


@site_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    """Serve a stored image; 404 when it does not exist."""
    return send_from_directory(current_app.extensions['media_store'].upload_dir, filename)
