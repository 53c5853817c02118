#!/usr/bin/env python3

import logging
import traceback
from flask import jsonify
from typing import Any, Dict

from ..configdb import ConfigDB
from ..errors import ShareMountError
from ..mountconfig import read_identity, read_mount_config, read_settings
from ..status import describe_mounts, describe_snapshot

logger = logging.getLogger(__name__)


class MountsHandler:
    """Handler for the read-only mount status API endpoints"""

    def __init__(self, configdb: ConfigDB):
        logger.debug("Initializing MountsHandler")
        self.configdb = configdb

    def handle_list_mounts(self) -> Dict[str, Any]:
        """
        Handle GET /api/v1/mounts
        List all declared mounts with their mount and link state
        """
        try:
            report = describe_mounts(
                read_identity(self.configdb),
                read_settings(self.configdb),
                read_mount_config(self.configdb),
            )
            return jsonify({
                'status': 'success',
                'data': {
                    'mounts': report,
                    'count': len(report)
                }
            })

        except ShareMountError as e:
            logger.error(f"Error listing mounts: {e}")
            return jsonify({
                'status': 'error',
                'message': 'Failed to list mounts',
                'error': str(e)
            }), 500
        except Exception as e:
            logger.error(f"Unexpected error listing mounts: {e}")
            logger.debug(traceback.format_exc())
            return jsonify({
                'status': 'error',
                'message': 'Failed to list mounts',
                'error': str(e)
            }), 500

    def handle_list_discovered(self) -> Dict[str, Any]:
        """
        Handle GET /api/v1/mounts/discovered
        List the SMB shares GVFS currently has mounted, declared or not
        """
        try:
            settings = read_settings(self.configdb)
            entries = describe_snapshot(settings)
            return jsonify({
                'status': 'success',
                'data': {
                    'mount_dir': settings.mount_dir,
                    'entries': entries,
                    'count': len(entries)
                }
            })

        except ShareMountError as e:
            logger.error(f"Error reading GVFS mounts: {e}")
            return jsonify({
                'status': 'error',
                'message': 'Failed to read GVFS mounts',
                'error': str(e)
            }), 500
        except Exception as e:
            logger.error(f"Unexpected error reading GVFS mounts: {e}")
            logger.debug(traceback.format_exc())
            return jsonify({
                'status': 'error',
                'message': 'Failed to read GVFS mounts',
                'error': str(e)
            }), 500
