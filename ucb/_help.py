"""Help text for ucb commands."""

from knack.help_files import helps

helps["cred"] = """
type: group
short-summary: Manage iOS signing credentials.
long-summary: |
    Every value a command needs can be passed as an argument, taken from
    'defaults' in the user config, or entered when prompted. Credential ids
    that are not given are chosen from a list fetched from Cloud Build.

    Values passed as arguments are used as-is; only prompted answers are
    validated.
"""

helps["cred get"] = """
type: command
short-summary: Show the details of an iOS credential.
examples:
    - name: Pick the credential from a list
      text: ucb cred get
    - name: Non-interactive lookup
      text: ucb cred get --api-key <key> --org-id my-org --cred-id 11111111-2222-3333-4444-555555555555
"""

helps["cred list"] = """
type: command
short-summary: List all iOS credentials of the organization.
examples:
    - name: List credentials as a table
      text: ucb cred list -o table
"""

helps["cred update"] = """
type: command
short-summary: Replace the label, certificate and provisioning profile of an iOS credential.
long-summary: |
    File paths must be absolute; dragging a file into the terminal works.
    The certificate password is asked with masked input when not passed.
examples:
    - name: Update interactively
      text: ucb cred update
    - name: Update a known credential
      text: >
        ucb cred update --cert-id 11111111-2222-3333-4444-555555555555 --label Prod
        --cert-path /certs/prod.p12 --profile-path /certs/prod.mobileprovision --cert-pass secret
"""

helps["cred upload"] = """
type: command
short-summary: Upload a new iOS credential.
examples:
    - name: Upload interactively
      text: ucb cred upload
    - name: Upload with every value given
      text: >
        ucb cred upload --label Prod --cert-path /certs/prod.p12
        --profile-path /certs/prod.mobileprovision --cert-pass secret
"""

helps["cred delete"] = """
type: command
short-summary: Delete an iOS credential.
examples:
    - name: Pick the credential to delete from a list
      text: ucb cred delete
"""

helps["project"] = """
type: group
short-summary: Inspect Cloud Build projects.
"""

helps["project list"] = """
type: command
short-summary: List the projects of the organization.
examples:
    - name: List project names and ids
      text: ucb project list -o table
"""

helps["config"] = """
type: group
short-summary: Manage user configuration (~/.ucb/settings.yaml).
long-summary: |
    Values under 'defaults' are used for any argument that is not passed,
    e.g. 'defaults.orgId'. The API key ('defaults.apiKey') is kept in a
    separate secrets.yaml.
"""

helps["config show"] = """
type: command
short-summary: Show the configuration with secrets masked.
"""

helps["config get"] = """
type: command
short-summary: Get one configuration value.
examples:
    - name: Show the default organization
      text: ucb config get --key defaults.orgId
"""

helps["config set"] = """
type: command
short-summary: Set one configuration value.
examples:
    - name: Store the API key
      text: ucb config set --key defaults.apiKey --value 0123456789abcdef0123456789abcdef
    - name: Raise the request timeout
      text: ucb config set --key api.timeout --value 60
"""

helps["config edit"] = """
type: command
short-summary: Open the settings file in $VISUAL or $EDITOR (vim when neither is set).
"""
