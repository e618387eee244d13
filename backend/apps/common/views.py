import posixpath

from django.conf import settings
from django.http import Http404, JsonResponse
from django.views.decorators.http import require_safe
from django.views.static import serve

from apps.checkout.config import CheckoutConfig
from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='views')

INDEX_FILE = 'index.html'


def _credentials_check():
    missing = CheckoutConfig.from_settings().missing_credentials()
    if missing:
        logger.warning('Checkout credentials missing', missing=list(missing))
        return {'status': 'fail', 'missing': list(missing)}
    return {'status': 'ok'}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: payment and rate provider credentials are configured."""
    checks = {'credentials': _credentials_check()}
    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    http_status = 200 if not failing else 503
    logger.info('Readiness probe evaluated', status=overall_status, failing_components=failing)
    return JsonResponse({'status': overall_status, 'checks': checks}, status=http_status)


@require_safe
def public_file(request, path=''):
    """Serve a file from PUBLIC_DIR verbatim; the root maps to index.html."""
    relative = posixpath.normpath(path).lstrip('/') if path else ''
    if relative in ('', '.'):
        relative = INDEX_FILE
    try:
        return serve(request, relative, document_root=str(settings.PUBLIC_DIR))
    except Http404:
        logger.debug('Public file not found', path=relative)
        raise
