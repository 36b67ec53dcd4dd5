"""Allow running as: python -m teetime_pricing"""

from teetime_pricing.main import main

if __name__ == "__main__":
    main()
