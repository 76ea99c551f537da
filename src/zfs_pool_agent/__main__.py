import sys

from zfs_pool_agent.main import main

sys.exit(main())
