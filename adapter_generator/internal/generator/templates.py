class Templates:
    """Шаблоны для генерации Go-адаптера"""

    main = """// It's autogenerated file. It's not recommended to modify it.
package >>>PKG_NAME<<<

import (
>>>IMPORTS<<<
)

>>>DYNAMIC_LOGIC<<<
>>>STATIC_LOGIC<<<
>>>ERRORS<<<
>>>STRUCTS<<<"""

    static_imports = (
        "bytes",
        "context",
        "encoding/json",
        "fmt",
        "net/http",
        "strings",
    )

    caller = """type >>>SERVICE_NAME<<< struct {
	client  *http.Client
	baseURL string
}

func New>>>SERVICE_NAME<<<(client *http.Client, baseURL string) *>>>SERVICE_NAME<<< {
	if client == nil {
		client = http.DefaultClient
	}
	return &>>>SERVICE_NAME<<<{
		client:  client,
		baseURL: strings.TrimRight(baseURL, "/"),
	}
}

type CallError struct {
	Path      string
	Code      string
	ErrorText string
}

func (e *CallError) Error() string {
	return fmt.Sprintf("[%s] %s: %s", e.Code, e.Path, e.ErrorText)
}

type callResponse struct {
	Result    string          `json:"result"`
	Data      json.RawMessage `json:"data"`
	Error     string          `json:"error"`
	ErrorText string          `json:"error_text"`
}

func (api *>>>SERVICE_NAME<<<) call(ctx context.Context, path string, options interface{}, result interface{}) error {
	body, err := json.Marshal(options)
	if err != nil {
		return err
	}

	req, err := http.NewRequestWithContext(ctx, http.MethodPost, api.baseURL+path, bytes.NewReader(body))
	if err != nil {
		return err
	}
	req.Header.Set("Content-Type", "application/json")

	resp, err := api.client.Do(req)
	if err != nil {
		return err
	}
	defer resp.Body.Close()

	var envelope callResponse
	if err := json.NewDecoder(resp.Body).Decode(&envelope); err != nil {
		return fmt.Errorf("%s: unexpected response (status %d): %w", path, resp.StatusCode, err)
	}
	if envelope.Error != "" {
		return &CallError{Path: path, Code: envelope.Error, ErrorText: envelope.ErrorText}
	}
	if len(envelope.Data) == 0 {
		return nil
	}
	return json.Unmarshal(envelope.Data, result)
}
"""

    method = """// >>>METHOD<<< calls >>>ROUTE<<< (version >>>VERSION<<<)
func (api *>>>SERVICE_NAME<<<) >>>METHOD<<<(ctx context.Context, options >>>INPUT<<<) (>>>OUTPUT<<<, error) {
	var result >>>OUTPUT<<<
	err := api.call(ctx, ">>>URL<<<", options, &result)
	return result, err
}

"""

    errors = """// Errors of >>>ROUTE<<< (version >>>VERSION<<<)
const (
>>>CONSTANTS<<<
)

"""

    usage = """
Possible get params:
    package - package name for generated code ('>>>PKG_NAME<<<' is default)
    internal_pkg - package names prefix that will be copied into generated code to avoid big imports
                   For example: 'internal_pkg=lazada_api&internal_pkg=mobapi'
    service_name - name of service ('>>>SERVICE_NAME<<<' is default)
"""


def fill(template: str, **markers: str) -> str:
    """Подстановка значений вместо маркеров >>>NAME<<<"""
    for marker, value in markers.items():
        template = template.replace(f">>>{marker.upper()}<<<", value)
    return template


templates = Templates()
