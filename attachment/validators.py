import os

from django.conf import settings

from tracker.exceptions import BadRequest

ALLOWED_TYPES = {
    '.jpeg': ('image/jpeg',),
    '.jpg': ('image/jpeg',),
    '.png': ('image/png',),
    '.gif': ('image/gif',),
    '.pdf': ('application/pdf',),
    '.doc': ('application/msword',),
    '.docx': ('application/vnd.openxmlformats-officedocument.wordprocessingml.document',),
    '.txt': ('text/plain',),
    '.zip': ('application/zip', 'application/x-zip-compressed'),
}

ALLOWED_MIMETYPES = {mime for mimes in ALLOWED_TYPES.values() for mime in mimes}


def validate_upload(uploaded_file):
    """
    Reject an upload unless both its extension and its declared MIME type are
    on the allow-list and it fits within MAX_UPLOAD_SIZE.
    """
    if uploaded_file is None:
        raise BadRequest('Please upload a file')

    ext = os.path.splitext(uploaded_file.name or '')[1].lower()
    content_type = (uploaded_file.content_type or '').split(';')[0].strip().lower()

    if ext not in ALLOWED_TYPES or content_type not in ALLOWED_MIMETYPES:
        raise BadRequest(
            'Invalid file type. Only JPEG, PNG, GIF, PDF, DOC, DOCX, TXT, and ZIP files are allowed.'
        )

    max_size = settings.MAX_UPLOAD_SIZE
    if uploaded_file.size > max_size:
        raise BadRequest(f"File too large. Maximum size is {max_size // (1024 * 1024)}MB.")

    return uploaded_file
