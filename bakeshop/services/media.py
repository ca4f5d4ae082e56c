"""Media storage for item pictures, banners and the logo.

Three backends share one interface: ``upload`` returns an UploadResult,
``destroy`` removes an asset by public id and ``public_id_from_url`` recovers
that id from a stored URL.
"""

import hashlib
import logging
import os
import re
import time
import uuid
from collections import namedtuple

import boto3
import requests
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app, url_for
from werkzeug.security import safe_join
from werkzeug.utils import secure_filename

from bakeshop.errors import InvalidMediaId, MediaError

logger = logging.getLogger(__name__)

UploadResult = namedtuple('UploadResult', ['public_id', 'url', 'resource_type', 'format'])

CLOUDINARY_API = 'https://api.cloudinary.com/v1_1'
CLOUDINARY_CDN = 'https://res.cloudinary.com'
CHUNK_SIZE = 64 * 1024


def file_extension(filename):
    return filename.rsplit('.', 1)[1].lower() if '.' in filename else ''


def allowed_file(filename, allow_video=False):
    """Check the extension against the configured image (and video) types."""
    extensions = set(current_app.config['ALLOWED_EXTENSIONS'])
    if allow_video:
        extensions |= set(current_app.config['ALLOWED_VIDEO_EXTENSIONS'])
    return file_extension(filename) in extensions


def resource_type_for(filename):
    if file_extension(filename) in current_app.config['ALLOWED_VIDEO_EXTENSIONS']:
        return 'video'
    return 'image'


def _stream_size(stream):
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def sign_destroy(public_id, timestamp, api_secret):
    """Cloudinary signature for a destroy call."""
    message = f'public_id={public_id}&timestamp={timestamp}{api_secret}'
    return hashlib.sha1(message.encode('utf-8')).hexdigest()


class LocalMediaStore:
    """Files under UPLOAD_FOLDER, served by the main.uploaded_file route."""

    def __init__(self, upload_folder):
        self.upload_folder = upload_folder

    def upload(self, file_storage, folder, on_progress=None):
        filename = secure_filename(file_storage.filename or '')
        if not filename:
            raise MediaError('No file selected')
        ext = file_extension(filename)
        public_id = f'{folder}/{uuid.uuid4().hex}.{ext}' if ext else f'{folder}/{uuid.uuid4().hex}'
        target = os.path.join(self.upload_folder, *public_id.split('/'))
        os.makedirs(os.path.dirname(target), exist_ok=True)

        stream = file_storage.stream
        try:
            total = _stream_size(stream)
            written = 0
            with open(target, 'wb') as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    out.write(chunk)
                    written += len(chunk)
                    if on_progress and total:
                        on_progress(round(written * 100 / total))
        except OSError as exc:
            raise MediaError(f'Upload failed: {exc}') from exc
        if on_progress:
            on_progress(100)

        return UploadResult(
            public_id=public_id,
            url=url_for('main.uploaded_file', filename=public_id),
            resource_type=resource_type_for(filename),
            format=ext,
        )

    def _path(self, public_id):
        path = safe_join(self.upload_folder, public_id or '')
        if path is None or os.path.normpath(path) == os.path.normpath(self.upload_folder):
            raise InvalidMediaId(f'Invalid media id: {public_id!r}')
        return path

    def destroy(self, public_id, resource_type='image'):
        path = self._path(public_id)
        if not os.path.isfile(path):
            return {'result': 'not found'}
        try:
            os.remove(path)
        except OSError as exc:
            raise MediaError(f'Delete failed: {exc}') from exc
        return {'result': 'ok'}

    def public_id_from_url(self, url):
        marker = '/uploads/'
        if not url or marker not in url:
            return None
        public_id = url.split(marker, 1)[1]
        self._path(public_id)
        return public_id


class CloudinaryMediaStore:
    """Unsigned preset uploads and signed deletions against Cloudinary."""

    def __init__(self, cloud_name, upload_preset, api_key=None, api_secret=None, timeout=60):
        self.cloud_name = cloud_name
        self.upload_preset = upload_preset
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    def upload(self, file_storage, folder, on_progress=None):
        if on_progress:
            on_progress(0)
        data = {'upload_preset': self.upload_preset}
        if folder:
            data['folder'] = folder
        try:
            response = requests.post(
                f'{CLOUDINARY_API}/{self.cloud_name}/auto/upload',
                data=data,
                files={'file': (file_storage.filename, file_storage.stream, file_storage.mimetype)},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise MediaError('Upload failed') from exc
        if on_progress:
            on_progress(100)
        return UploadResult(
            public_id=body['public_id'],
            url=body['secure_url'],
            resource_type=body.get('resource_type', 'image'),
            format=body.get('format'),
        )

    def destroy(self, public_id, resource_type='image'):
        if not self.api_key or not self.api_secret:
            raise MediaError('Missing Cloudinary credentials')
        timestamp = int(time.time())
        try:
            response = requests.post(
                f'{CLOUDINARY_API}/{self.cloud_name}/{resource_type}/destroy',
                data={
                    'public_id': public_id,
                    'timestamp': str(timestamp),
                    'api_key': self.api_key,
                    'signature': sign_destroy(public_id, timestamp, self.api_secret),
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            result = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise MediaError('Delete failed') from exc
        logger.info('Cloudinary deletion result for %s: %s', public_id, result)
        return result

    def public_id_from_url(self, url):
        match = re.search(r'/v\d+/(.+)\.\w+$', url or '')
        return match.group(1) if match else None

    def optimized_url(self, public_id, width=None, height=None, quality=None, format=None):
        """Delivery URL with resize / quality / format transformations."""
        transformations = []
        if width:
            transformations.append(f'w_{width}')
        if height:
            transformations.append(f'h_{height}')
        if quality:
            transformations.append(f'q_{quality}')
        if format:
            transformations.append(f'f_{format}')
        transformations.append('c_limit')
        return (f'{CLOUDINARY_CDN}/{self.cloud_name}/image/upload/'
                f'{",".join(transformations)}/{public_id}')


class S3MediaStore:
    """Objects in an S3 bucket with public-read URLs."""

    def __init__(self, bucket, region, client=None):
        self.bucket = bucket
        self.region = region
        self.client = client or boto3.client('s3', region_name=region)

    @property
    def base_url(self):
        return f'https://{self.bucket}.s3.{self.region}.amazonaws.com/'

    def upload(self, file_storage, folder, on_progress=None):
        filename = secure_filename(file_storage.filename or '')
        if not filename:
            raise MediaError('No file selected')
        ext = file_extension(filename)
        key = f'{folder}/{uuid.uuid4().hex}.{ext}'
        stream = file_storage.stream
        total = _stream_size(stream)
        sent = [0]

        def callback(bytes_amount):
            sent[0] += bytes_amount
            if on_progress and total:
                on_progress(min(100, round(sent[0] * 100 / total)))

        try:
            self.client.upload_fileobj(
                stream, self.bucket, key,
                ExtraArgs={'ContentType': file_storage.mimetype or 'application/octet-stream'},
                Callback=callback,
            )
        except (BotoCoreError, ClientError) as exc:
            raise MediaError('Upload failed') from exc
        if on_progress:
            on_progress(100)
        return UploadResult(public_id=key, url=self.base_url + key,
                            resource_type=resource_type_for(filename), format=ext)

    def destroy(self, public_id, resource_type='image'):
        try:
            self.client.delete_object(Bucket=self.bucket, Key=public_id)
        except (BotoCoreError, ClientError) as exc:
            raise MediaError('Delete failed') from exc
        return {'result': 'ok'}

    def public_id_from_url(self, url):
        if not url or not url.startswith(self.base_url):
            return None
        return url[len(self.base_url):]


def get_media_store():
    """Media store for the configured MEDIA_BACKEND."""
    cfg = current_app.config
    backend = cfg['MEDIA_BACKEND']
    if backend == 'cloudinary':
        return CloudinaryMediaStore(
            cfg['CLOUDINARY_CLOUD_NAME'],
            cfg['CLOUDINARY_UPLOAD_PRESET'],
            cfg.get('CLOUDINARY_API_KEY'),
            cfg.get('CLOUDINARY_API_SECRET'),
        )
    if backend == 's3':
        return S3MediaStore(cfg['S3_BUCKET'], cfg['AWS_REGION'])
    if backend == 'local':
        return LocalMediaStore(cfg['UPLOAD_FOLDER'])
    raise RuntimeError(f'Unknown MEDIA_BACKEND: {backend}')


def remove_asset(url, resource_type='image'):
    """Best-effort removal of the asset behind ``url``.

    Used after the owning row is gone; a failure leaves an orphaned file,
    which is logged and not raised.
    """
    store = get_media_store()
    try:
        public_id = store.public_id_from_url(url)
        if not public_id:
            return False
        store.destroy(public_id, resource_type=resource_type)
    except MediaError:
        logger.warning('Could not remove media asset behind %s', url, exc_info=True)
        return False
    return True
