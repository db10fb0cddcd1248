"""
Storefront checkout probe.

- `prober.document` parses storefront HTML and evaluates XPath queries
- `prober.http_session` is the per-probe HTTP session
- `prober.extract` holds the product id, payment method and CAPTCHA extractors
- `prober.orchestrator` chains fetches and extractions into one probe
- `prober.main` is the command-line entry point
"""
